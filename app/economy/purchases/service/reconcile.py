from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security_events import (
    EVENT_CUSTOMER_ID_BOUND_TO_OTHER_USER,
    EVENT_DUPLICATE_SESSION_DIFFERENT_USER,
    EVENT_PURCHASE_COMPLETED,
    emit_security_event,
)
from app.db.models.purchases import Purchase
from app.db.repo.purchases_repo import PurchasesRepo
from app.economy.purchases.catalog import (
    DEFAULT_AMOUNT_MINOR,
    DEFAULT_CURRENCY,
    DEFAULT_TIER,
    TierSpec,
    get_tier,
)
from app.economy.purchases.errors import MissingUserMetadataError, UnknownTierError
from app.economy.purchases.types import WebhookOutcome
from app.economy.purchases.webhook_events import CheckoutSessionObject

from .grants import _grant_tier_entitlements

logger = structlog.get_logger(__name__)


def _resolve_user_and_tier(checkout: CheckoutSessionObject) -> tuple[str, TierSpec]:
    user_id = (checkout.metadata.user_id or "").strip()
    if not user_id:
        raise MissingUserMetadataError

    tier_code = checkout.metadata.tier or DEFAULT_TIER
    tier = get_tier(tier_code)
    if tier is None:
        raise UnknownTierError(tier_code)
    return user_id, tier


async def reconcile_checkout_session(
    session: AsyncSession,
    *,
    checkout: CheckoutSessionObject,
    now_utc: datetime,
) -> WebhookOutcome:
    user_id, tier = _resolve_user_and_tier(checkout)

    existing = await PurchasesRepo.get_by_session_id(session, checkout.id)
    if existing is not None:
        if existing.user_id == user_id:
            logger.info(
                "stripe_webhook_duplicate_delivery",
                stripe_session_id=checkout.id,
                user_id=user_id,
            )
            return WebhookOutcome(status="duplicate", purchase_id=existing.id)

        await emit_security_event(
            session,
            event_type=EVENT_DUPLICATE_SESSION_DIFFERENT_USER,
            happened_at=now_utc,
            user_id=user_id,
            stripe_session_id=checkout.id,
            stripe_customer_id=checkout.customer,
            details={
                "original_user_id": existing.user_id,
                "attempted_user_id": user_id,
                "tier": tier.tier,
            },
        )
        logger.warning(
            "stripe_webhook_session_replay",
            stripe_session_id=checkout.id,
            original_user_id=existing.user_id,
            attempted_user_id=user_id,
        )
        return WebhookOutcome(status="session_replay")

    if checkout.customer:
        bound_purchase = await PurchasesRepo.get_customer_purchase_of_other_user(
            session,
            stripe_customer_id=checkout.customer,
            user_id=user_id,
        )
        if bound_purchase is not None:
            await emit_security_event(
                session,
                event_type=EVENT_CUSTOMER_ID_BOUND_TO_OTHER_USER,
                happened_at=now_utc,
                user_id=user_id,
                stripe_session_id=checkout.id,
                stripe_customer_id=checkout.customer,
                details={
                    "bound_user_id": bound_purchase.user_id,
                    "attempted_user_id": user_id,
                    "tier": tier.tier,
                },
            )
            logger.warning(
                "stripe_webhook_customer_conflict",
                stripe_session_id=checkout.id,
                bound_user_id=bound_purchase.user_id,
                attempted_user_id=user_id,
            )
            return WebhookOutcome(status="customer_conflict")

    amount = checkout.amount_total if checkout.amount_total is not None else DEFAULT_AMOUNT_MINOR
    currency = (checkout.currency or DEFAULT_CURRENCY).lower()
    purchase = await PurchasesRepo.create(
        session,
        purchase=Purchase(
            user_id=user_id,
            stripe_session_id=checkout.id,
            stripe_customer_id=checkout.customer,
            stripe_payment_intent_id=checkout.payment_intent,
            tier=tier.tier,
            amount=amount,
            currency=currency,
            status="completed",
            created_at=now_utc,
        ),
    )

    subscription_type = await _grant_tier_entitlements(
        session,
        purchase=purchase,
        tier=tier,
        now_utc=now_utc,
    )

    await emit_security_event(
        session,
        event_type=EVENT_PURCHASE_COMPLETED,
        happened_at=now_utc,
        user_id=user_id,
        stripe_session_id=checkout.id,
        stripe_customer_id=checkout.customer,
        details={
            "tier": tier.tier,
            "amount": amount,
            "currency": currency,
            "entitlements": list(tier.entitlement_keys),
        },
    )
    logger.info(
        "stripe_webhook_purchase_completed",
        stripe_session_id=checkout.id,
        user_id=user_id,
        tier=tier.tier,
        subscription_type=subscription_type,
    )
    return WebhookOutcome(
        status="received",
        purchase_id=purchase.id,
        entitlement_keys=tier.entitlement_keys,
        subscription_type=subscription_type,
    )
