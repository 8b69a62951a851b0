from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.economy.purchases.types import WebhookOutcome
from app.economy.purchases.webhook_events import (
    CheckoutSessionCompletedEvent,
    CheckoutSessionObject,
    WebhookEvent,
)

from .reconcile import reconcile_checkout_session

logger = structlog.get_logger(__name__)

MAX_RECONCILE_ATTEMPTS = 2


async def ingest_checkout_completed(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    checkout: CheckoutSessionObject,
    now_utc: datetime,
) -> WebhookOutcome:
    attempt = 1
    while True:
        try:
            async with session_factory.begin() as session:
                return await reconcile_checkout_session(
                    session,
                    checkout=checkout,
                    now_utc=now_utc,
                )
        except IntegrityError:
            # A concurrent delivery committed the same session first.
            if attempt >= MAX_RECONCILE_ATTEMPTS:
                raise
            logger.warning(
                "stripe_webhook_concurrent_delivery_retry",
                stripe_session_id=checkout.id,
                attempt=attempt,
            )
            attempt += 1


async def ingest_webhook_event(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    event: WebhookEvent,
    now_utc: datetime,
) -> WebhookOutcome:
    if not isinstance(event, CheckoutSessionCompletedEvent):
        logger.info("stripe_webhook_event_ignored", event_type=event.type, event_id=event.id)
        return WebhookOutcome(status="ignored")

    return await ingest_checkout_completed(
        session_factory,
        checkout=event.checkout,
        now_utc=now_utc,
    )
