from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.purchases import Purchase
from app.db.repo.entitlements_repo import EntitlementsRepo
from app.db.repo.profiles_repo import ProfilesRepo
from app.economy.purchases.catalog import (
    TierSpec,
    compute_subscription_type,
    is_season_1_unlocked,
)

logger = structlog.get_logger(__name__)


async def _refresh_profile_flags(
    session: AsyncSession,
    *,
    user_id: str,
    now_utc: datetime,
) -> str:
    active_keys = await EntitlementsRepo.list_active_keys(session, user_id=user_id)
    subscription_type = compute_subscription_type(active_keys)
    updated_rows = await ProfilesRepo.set_entitlement_flags(
        session,
        user_id=user_id,
        season_1_unlocked=is_season_1_unlocked(active_keys),
        subscription_type=subscription_type,
        now_utc=now_utc,
    )
    if updated_rows == 0:
        logger.warning("purchase_profile_missing", user_id=user_id)
    return subscription_type


async def _grant_tier_entitlements(
    session: AsyncSession,
    *,
    purchase: Purchase,
    tier: TierSpec,
    now_utc: datetime,
) -> str:
    for entitlement_key in tier.entitlement_keys:
        await EntitlementsRepo.upsert_active(
            session,
            user_id=purchase.user_id,
            entitlement_key=entitlement_key,
            source_purchase_id=purchase.id,
            now_utc=now_utc,
        )
    return await _refresh_profile_flags(session, user_id=purchase.user_id, now_utc=now_utc)


async def _restore_missing_entitlements(
    session: AsyncSession,
    *,
    purchase: Purchase,
    tier: TierSpec,
    now_utc: datetime,
) -> list[str]:
    restored_keys: list[str] = []
    for entitlement_key in tier.entitlement_keys:
        inserted = await EntitlementsRepo.insert_if_absent(
            session,
            user_id=purchase.user_id,
            entitlement_key=entitlement_key,
            source_purchase_id=purchase.id,
            now_utc=now_utc,
        )
        if inserted:
            restored_keys.append(entitlement_key)

    if restored_keys:
        await _refresh_profile_flags(session, user_id=purchase.user_id, now_utc=now_utc)
    return restored_keys
