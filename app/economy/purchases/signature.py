from __future__ import annotations

import stripe
import structlog

from app.economy.purchases.errors import WebhookSignatureError

logger = structlog.get_logger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


class WebhookSignatureVerifier:
    def __init__(self, *, secret: str, tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS) -> None:
        self._secret = secret
        self._tolerance_seconds = tolerance_seconds

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    def verify(self, payload: bytes, signature_header: str | None) -> None:
        if not self.enabled:
            logger.warning("stripe_webhook_signature_unverified")
            return

        if not signature_header:
            raise WebhookSignatureError("missing Stripe-Signature header")

        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                signature_header,
                self._secret,
                tolerance=self._tolerance_seconds,
            )
        except UnicodeDecodeError as exc:
            raise WebhookSignatureError("payload is not valid UTF-8") from exc
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError(str(exc)) from exc
