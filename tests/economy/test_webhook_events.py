from __future__ import annotations

import json

import pytest

from app.economy.purchases.errors import WebhookPayloadError
from app.economy.purchases.webhook_events import (
    CheckoutSessionCompletedEvent,
    IgnoredEvent,
    parse_webhook_event,
)
from tests.season_fixtures import checkout_event, encode_event


def test_checkout_completed_event_is_parsed() -> None:
    event = parse_webhook_event(encode_event(checkout_event(session_id="cs_42", tier="director")).encode())

    assert isinstance(event, CheckoutSessionCompletedEvent)
    assert event.checkout.id == "cs_42"
    assert event.checkout.customer == "cus_a"
    assert event.checkout.metadata.user_id == "user-a"
    assert event.checkout.metadata.tier == "director"


def test_other_event_types_are_ignored_variants() -> None:
    event = parse_webhook_event(json.dumps({"id": "evt_1", "type": "invoice.paid", "data": {"object": {}}}))

    assert isinstance(event, IgnoredEvent)
    assert event.type == "invoice.paid"


def test_checkout_without_metadata_parses_with_empty_metadata() -> None:
    document = checkout_event(user_id=None, tier=None)
    del document["data"]["object"]["metadata"]

    event = parse_webhook_event(encode_event(document))

    assert isinstance(event, CheckoutSessionCompletedEvent)
    assert event.checkout.metadata.user_id is None
    assert event.checkout.metadata.tier is None


@pytest.mark.parametrize(
    "payload",
    [
        b"not-json",
        b"[]",
        b'{"data": {}}',
        b'{"type": 42}',
    ],
)
def test_malformed_envelope_is_rejected(payload: bytes) -> None:
    with pytest.raises(WebhookPayloadError):
        parse_webhook_event(payload)


def test_checkout_without_session_id_is_rejected() -> None:
    document = checkout_event()
    del document["data"]["object"]["id"]

    with pytest.raises(WebhookPayloadError):
        parse_webhook_event(encode_event(document))


def test_checkout_with_non_integer_amount_is_rejected() -> None:
    document = checkout_event()
    document["data"]["object"]["amount_total"] = "2900"

    with pytest.raises(WebhookPayloadError):
        parse_webhook_event(encode_event(document))


def test_checkout_with_oversized_user_id_is_rejected() -> None:
    with pytest.raises(WebhookPayloadError):
        parse_webhook_event(encode_event(checkout_event(user_id="u" * 65)))


def test_checkout_with_user_id_at_column_width_is_accepted() -> None:
    event = parse_webhook_event(encode_event(checkout_event(user_id="u" * 64)))

    assert isinstance(event, CheckoutSessionCompletedEvent)
    assert event.checkout.metadata.user_id == "u" * 64
