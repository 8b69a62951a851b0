from app.workers.tasks.payments_reliability import repair_missing_entitlements

__all__ = [
    "repair_missing_entitlements",
]
