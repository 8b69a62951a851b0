from __future__ import annotations

from .grants import _grant_tier_entitlements, _refresh_profile_flags, _restore_missing_entitlements
from .ingest import MAX_RECONCILE_ATTEMPTS, ingest_checkout_completed, ingest_webhook_event
from .reconcile import _resolve_user_and_tier, reconcile_checkout_session
from .repair import repair_purchase_entitlements


class PurchaseService:
    _resolve_user_and_tier = staticmethod(_resolve_user_and_tier)
    _refresh_profile_flags = staticmethod(_refresh_profile_flags)
    _grant_tier_entitlements = staticmethod(_grant_tier_entitlements)
    _restore_missing_entitlements = staticmethod(_restore_missing_entitlements)
    reconcile_checkout_session = staticmethod(reconcile_checkout_session)
    ingest_checkout_completed = staticmethod(ingest_checkout_completed)
    ingest_webhook_event = staticmethod(ingest_webhook_event)
    repair_purchase_entitlements = staticmethod(repair_purchase_entitlements)


__all__ = [
    "MAX_RECONCILE_ATTEMPTS",
    "PurchaseService",
]
