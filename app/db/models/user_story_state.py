from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class UserStoryState(Base):
    __tablename__ = "user_story_state"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    trust_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    suspicion_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    secrets_unlocked: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ending_path: Mapped[str | None] = mapped_column(String(32), nullable=True)
    central_dilemma_unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    central_word_validated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    central_word_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    central_calcul_step: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
