from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from app.db.models.missions import Mission
from app.db.models.player_country_progress import PlayerCountryProgress
from app.db.models.puzzle_pieces import PuzzlePiece
from app.db.models.user_fragments import UserFragment
from app.db.models.user_progress import UserProgress
from app.db.models.user_tokens import UserToken

CountryReference = Literal["id", "code"]


@dataclass(frozen=True, slots=True)
class ProgressTable:
    name: str
    model: type[Any]
    country_column: str
    reference: CountryReference

    @property
    def column(self) -> Any:
        return getattr(self.model, self.country_column)


PROGRESS_TABLES: tuple[ProgressTable, ...] = (
    ProgressTable("missions", Mission, "country_id", "id"),
    ProgressTable("player_country_progress", PlayerCountryProgress, "country_code", "code"),
    ProgressTable("user_fragments", UserFragment, "country_id", "id"),
    ProgressTable("user_tokens", UserToken, "country_code", "code"),
    ProgressTable("user_progress", UserProgress, "country_id", "id"),
    ProgressTable("puzzle_pieces", PuzzlePiece, "country_id", "id"),
)
