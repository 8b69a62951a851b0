from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("xp >= 0", name="ck_profiles_xp_non_negative"),
        CheckConstraint("level >= 1", name="ck_profiles_level_positive"),
        CheckConstraint("streak >= 0", name="ck_profiles_streak_non_negative"),
        CheckConstraint("longest_streak >= 0", name="ck_profiles_longest_streak_non_negative"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    has_completed_puzzle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    season_1_unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    subscription_type: Mapped[str] = mapped_column(String(32), nullable=False, default="free")
    last_mission_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
