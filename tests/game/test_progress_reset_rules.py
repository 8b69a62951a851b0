from __future__ import annotations

import pytest

from app.game.progress_reset.aggregates import level_for_xp, xp_from_best_scores
from app.game.progress_reset.boundaries import is_full_reset, resolve_retained_seasons
from app.game.progress_reset.errors import ResetBoundaryError
from app.game.progress_reset.tables import PROGRESS_TABLES


@pytest.mark.parametrize(
    ("reset_from", "expected"),
    [
        ("all", frozenset()),
        ("season0", frozenset()),
        ("season1", frozenset({0})),
        ("season2", frozenset({0, 1})),
    ],
)
def test_retained_seasons_by_boundary(reset_from: str, expected: frozenset[int]) -> None:
    assert resolve_retained_seasons(reset_from) == expected


@pytest.mark.parametrize("reset_from", ["", "season3", "ALL", "season-1"])
def test_unknown_boundary_raises(reset_from: str) -> None:
    with pytest.raises(ResetBoundaryError):
        resolve_retained_seasons(reset_from)


def test_full_reset_only_when_nothing_is_retained() -> None:
    assert is_full_reset(resolve_retained_seasons("all")) is True
    assert is_full_reset(resolve_retained_seasons("season1")) is False


@pytest.mark.parametrize(
    ("xp", "level"),
    [(0, 1), (80, 1), (99, 1), (100, 2), (250, 3)],
)
def test_level_for_xp(xp: int, level: int) -> None:
    assert level_for_xp(xp) == level


def test_xp_from_best_scores() -> None:
    assert xp_from_best_scores(8) == 80
    assert xp_from_best_scores(0) == 0


def test_progress_tables_reference_real_columns() -> None:
    names = [table.name for table in PROGRESS_TABLES]
    assert len(names) == len(set(names))
    for table in PROGRESS_TABLES:
        assert table.model.__tablename__ == table.name
        assert table.column.key == table.country_column
        assert table.reference in {"id", "code"}
