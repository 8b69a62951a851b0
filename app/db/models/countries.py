from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class Country(Base):
    __tablename__ = "countries"
    __table_args__ = (
        CheckConstraint("season_number >= 0", name="ck_countries_season_non_negative"),
        Index("idx_countries_season_release", "season_number", "release_order"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    code: Mapped[str] = mapped_column(String(8), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    season_number: Mapped[int] = mapped_column(Integer, nullable=False)
    release_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
