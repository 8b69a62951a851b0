from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security_events import EVENT_ENTITLEMENT_PURCHASE_MISMATCH, emit_security_event
from app.db.models.entitlements import Entitlement
from app.db.repo.entitlements_repo import EntitlementsRepo
from app.db.repo.purchases_repo import PurchasesRepo
from app.economy.entitlements.errors import InvalidEntitlementKeyError
from app.economy.entitlements.types import EntitlementCheckResult
from app.economy.purchases.catalog import FULL_ACCESS_KEY, SEASON_KEYS

logger = structlog.get_logger(__name__)

MAX_ENTITLEMENT_KEY_LENGTH = 64


class EntitlementService:
    @staticmethod
    async def _load_active_entitlement(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement_key: str,
    ) -> Entitlement | None:
        entitlement = await EntitlementsRepo.get_active(
            session,
            user_id=user_id,
            entitlement_key=entitlement_key,
        )
        if entitlement is None and entitlement_key in SEASON_KEYS:
            entitlement = await EntitlementsRepo.get_active(
                session,
                user_id=user_id,
                entitlement_key=FULL_ACCESS_KEY,
            )
        return entitlement

    @staticmethod
    async def _has_valid_provenance(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement: Entitlement,
        now_utc: datetime,
    ) -> bool:
        if entitlement.source_purchase_id is None:
            return True

        purchase = await PurchasesRepo.get_by_id(session, entitlement.source_purchase_id)
        if purchase is not None and purchase.status == "completed" and purchase.user_id == user_id:
            return True

        await emit_security_event(
            session,
            event_type=EVENT_ENTITLEMENT_PURCHASE_MISMATCH,
            happened_at=now_utc,
            user_id=user_id,
            stripe_session_id=purchase.stripe_session_id if purchase is not None else None,
            details={
                "entitlement_key": entitlement.entitlement_key,
                "source_purchase_id": str(entitlement.source_purchase_id),
                "purchase_status": purchase.status if purchase is not None else None,
                "purchase_user": purchase.user_id if purchase is not None else None,
            },
        )
        logger.warning(
            "entitlement_purchase_mismatch",
            user_id=user_id,
            entitlement_key=entitlement.entitlement_key,
            source_purchase_id=str(entitlement.source_purchase_id),
        )
        return False

    @staticmethod
    async def check(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement_key: str,
        now_utc: datetime,
    ) -> EntitlementCheckResult:
        key = entitlement_key.strip()
        if not key or len(key) > MAX_ENTITLEMENT_KEY_LENGTH:
            raise InvalidEntitlementKeyError

        entitlement = await EntitlementService._load_active_entitlement(
            session,
            user_id=user_id,
            entitlement_key=key,
        )
        if entitlement is None:
            return EntitlementCheckResult(entitled=False, key=key)

        if not await EntitlementService._has_valid_provenance(
            session,
            user_id=user_id,
            entitlement=entitlement,
            now_utc=now_utc,
        ):
            return EntitlementCheckResult(entitled=False, key=key)

        return EntitlementCheckResult(
            entitled=True,
            key=key,
            since=entitlement.created_at,
            granted_key=entitlement.entitlement_key,
            source_purchase_id=entitlement.source_purchase_id,
        )
