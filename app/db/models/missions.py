from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base, JSONDocument


class Mission(Base):
    __tablename__ = "missions"
    __table_args__ = (Index("idx_missions_user_country", "user_id", "country_id"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    country_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("countries.id"), nullable=False)
    mission_title: Mapped[str] = mapped_column(String(255), nullable=False)
    mission_data: Mapped[dict[str, object] | None] = mapped_column(JSONDocument, nullable=True)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
