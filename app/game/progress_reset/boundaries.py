from __future__ import annotations

from app.game.progress_reset.errors import ResetBoundaryError

RESET_FROM_ALL = "all"

RETAINED_SEASONS_BY_BOUNDARY: dict[str, frozenset[int]] = {
    RESET_FROM_ALL: frozenset(),
    "season0": frozenset(),
    "season1": frozenset({0}),
    "season2": frozenset({0, 1}),
}


def resolve_retained_seasons(reset_from: str) -> frozenset[int]:
    retained = RETAINED_SEASONS_BY_BOUNDARY.get(reset_from)
    if retained is None:
        raise ResetBoundaryError(reset_from)
    return retained


def is_full_reset(retained_seasons: frozenset[int]) -> bool:
    return not retained_seasons
