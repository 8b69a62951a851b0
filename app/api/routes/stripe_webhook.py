from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.economy.purchases.errors import (
    MissingUserMetadataError,
    UnknownTierError,
    WebhookPayloadError,
    WebhookSignatureError,
)
from app.economy.purchases.service import PurchaseService
from app.economy.purchases.signature import WebhookSignatureVerifier
from app.economy.purchases.webhook_events import parse_webhook_event

router = APIRouter(tags=["payments"])
logger = structlog.get_logger(__name__)

STRIPE_SIGNATURE_HEADER = "Stripe-Signature"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _build_signature_verifier() -> WebhookSignatureVerifier:
    settings = get_settings()
    return WebhookSignatureVerifier(
        secret=settings.stripe_webhook_secret,
        tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
    )


@router.post("/webhooks/stripe")
async def stripe_webhook(request: Request) -> JSONResponse:
    payload = await request.body()

    try:
        _build_signature_verifier().verify(payload, request.headers.get(STRIPE_SIGNATURE_HEADER))
    except WebhookSignatureError as exc:
        logger.warning("stripe_webhook_invalid_signature", reason=str(exc))
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid signature")

    try:
        event = parse_webhook_event(payload)
        outcome = await PurchaseService.ingest_webhook_event(
            SessionLocal,
            event=event,
            now_utc=datetime.now(timezone.utc),
        )
    except MissingUserMetadataError:
        logger.warning("stripe_webhook_missing_user_id")
        return _error(status.HTTP_400_BAD_REQUEST, "Missing user_id in metadata")
    except UnknownTierError as exc:
        logger.warning("stripe_webhook_unknown_tier", tier=str(exc))
        return _error(status.HTTP_400_BAD_REQUEST, "Unknown tier")
    except WebhookPayloadError as exc:
        logger.warning("stripe_webhook_invalid_payload", reason=str(exc))
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid payload")
    except Exception:
        logger.exception("stripe_webhook_processing_failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Webhook processing failed")

    if outcome.status == "session_replay":
        return _error(status.HTTP_409_CONFLICT, "Session already processed")
    if outcome.status == "customer_conflict":
        return _error(status.HTTP_403_FORBIDDEN, "Payment bound to another account")

    content: dict[str, object] = {"received": True}
    if outcome.status == "duplicate":
        content["note"] = "already_processed"
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)
