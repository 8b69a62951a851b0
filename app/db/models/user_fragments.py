from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class UserFragment(Base):
    __tablename__ = "user_fragments"
    __table_args__ = (Index("idx_user_fragments_user_country", "user_id", "country_id"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    country_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("countries.id"), nullable=False)
    fragment_index: Mapped[int] = mapped_column(Integer, nullable=False)
    is_placed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    obtained_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    placed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
