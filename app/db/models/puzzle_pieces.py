from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class PuzzlePiece(Base):
    __tablename__ = "puzzle_pieces"
    __table_args__ = (
        UniqueConstraint("user_id", "country_id", "piece_index", name="uq_puzzle_pieces_user_piece"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    country_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("countries.id"), nullable=False)
    piece_index: Mapped[int] = mapped_column(Integer, nullable=False)
    unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    unlocked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
