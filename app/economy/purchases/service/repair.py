from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security_events import EVENT_ENTITLEMENT_REPAIRED, emit_security_event
from app.db.repo.purchases_repo import PurchasesRepo
from app.economy.purchases.catalog import get_tier

from .grants import _restore_missing_entitlements

logger = structlog.get_logger(__name__)


async def repair_purchase_entitlements(
    session: AsyncSession,
    *,
    purchase_id: UUID,
    now_utc: datetime,
) -> str:
    purchase = await PurchasesRepo.get_by_id(session, purchase_id)
    if purchase is None:
        return "missing"
    if purchase.status != "completed":
        return "skipped"

    tier = get_tier(purchase.tier)
    if tier is None:
        logger.warning(
            "entitlement_repair_unknown_tier",
            purchase_id=str(purchase.id),
            tier=purchase.tier,
        )
        return "skipped"

    restored_keys = await _restore_missing_entitlements(
        session,
        purchase=purchase,
        tier=tier,
        now_utc=now_utc,
    )
    if not restored_keys:
        return "skipped"

    await emit_security_event(
        session,
        event_type=EVENT_ENTITLEMENT_REPAIRED,
        happened_at=now_utc,
        user_id=purchase.user_id,
        stripe_session_id=purchase.stripe_session_id,
        stripe_customer_id=purchase.stripe_customer_id,
        details={
            "purchase_id": str(purchase.id),
            "tier": purchase.tier,
            "entitlements": restored_keys,
        },
    )
    return "repaired"
