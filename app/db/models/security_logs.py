from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base, JSONDocument


class SecurityLogEntry(Base):
    __tablename__ = "security_logs"
    __table_args__ = (
        CheckConstraint(
            "event_type IN ('duplicate_session_different_user','customer_id_bound_to_other_user',"
            "'purchase_completed','entitlement_purchase_mismatch','progress_reset',"
            "'entitlement_repaired')",
            name="ck_security_logs_event_type",
        ),
        Index("idx_security_logs_user_created", "user_id", "created_at"),
        Index("idx_security_logs_type_created", "event_type", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    stripe_session_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    stripe_customer_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    details: Mapped[dict[str, object]] = mapped_column(JSONDocument, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
