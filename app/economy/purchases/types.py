from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from uuid import UUID

WebhookOutcomeStatus = Literal[
    "received",
    "duplicate",
    "session_replay",
    "customer_conflict",
    "ignored",
]


@dataclass(slots=True)
class WebhookOutcome:
    status: WebhookOutcomeStatus
    purchase_id: UUID | None = None
    entitlement_keys: tuple[str, ...] = ()
    subscription_type: str | None = None

    @property
    def granted(self) -> bool:
        return self.status == "received"
