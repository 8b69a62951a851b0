from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.security_logs_repo import SecurityLogsRepo

EVENT_DUPLICATE_SESSION_DIFFERENT_USER = "duplicate_session_different_user"
EVENT_CUSTOMER_ID_BOUND_TO_OTHER_USER = "customer_id_bound_to_other_user"
EVENT_PURCHASE_COMPLETED = "purchase_completed"
EVENT_ENTITLEMENT_PURCHASE_MISMATCH = "entitlement_purchase_mismatch"
EVENT_PROGRESS_RESET = "progress_reset"
EVENT_ENTITLEMENT_REPAIRED = "entitlement_repaired"

SECURITY_EVENT_TYPES = (
    EVENT_DUPLICATE_SESSION_DIFFERENT_USER,
    EVENT_CUSTOMER_ID_BOUND_TO_OTHER_USER,
    EVENT_PURCHASE_COMPLETED,
    EVENT_ENTITLEMENT_PURCHASE_MISMATCH,
    EVENT_PROGRESS_RESET,
    EVENT_ENTITLEMENT_REPAIRED,
)

logger = structlog.get_logger(__name__)


async def emit_security_event(
    session: AsyncSession,
    *,
    event_type: str,
    happened_at: datetime,
    user_id: str | None = None,
    stripe_session_id: str | None = None,
    stripe_customer_id: str | None = None,
    details: dict[str, object] | None = None,
) -> None:
    if event_type not in SECURITY_EVENT_TYPES:
        raise ValueError(f"unknown security event type: {event_type}")

    await SecurityLogsRepo.create(
        session,
        event_type=event_type,
        user_id=user_id,
        stripe_session_id=stripe_session_id,
        stripe_customer_id=stripe_customer_id,
        details=details or {},
        created_at=happened_at,
    )
    logger.info(
        "security_event_recorded",
        event_type=event_type,
        user_id=user_id,
        stripe_session_id=stripe_session_id,
    )
