from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from app.economy.purchases.errors import WebhookPayloadError

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class CheckoutSessionMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: StrictStr | None = Field(default=None, max_length=64)
    tier: StrictStr | None = None


class CheckoutSessionObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(min_length=1, max_length=255)
    customer: StrictStr | None = Field(default=None, max_length=255)
    payment_intent: StrictStr | None = Field(default=None, max_length=255)
    amount_total: StrictInt | None = Field(default=None, ge=0)
    currency: StrictStr | None = Field(default=None, min_length=3, max_length=3)
    metadata: CheckoutSessionMetadata = Field(default_factory=CheckoutSessionMetadata)


class CheckoutSessionData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object: CheckoutSessionObject


class CheckoutSessionCompletedEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Literal["checkout.session.completed"]
    id: StrictStr | None = None
    data: CheckoutSessionData

    @property
    def checkout(self) -> CheckoutSessionObject:
        return self.data.object


class IgnoredEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: StrictStr
    id: StrictStr | None = None


WebhookEvent = CheckoutSessionCompletedEvent | IgnoredEvent


def parse_webhook_event(payload: bytes | str) -> WebhookEvent:
    try:
        document = json.loads(payload)
    except ValueError as exc:
        raise WebhookPayloadError("payload is not valid JSON") from exc

    if not isinstance(document, dict) or not isinstance(document.get("type"), str):
        raise WebhookPayloadError("event type is missing")

    try:
        if document["type"] == CHECKOUT_SESSION_COMPLETED:
            return CheckoutSessionCompletedEvent.model_validate(document)
        return IgnoredEvent.model_validate(document)
    except ValidationError as exc:
        raise WebhookPayloadError("event payload failed validation") from exc
