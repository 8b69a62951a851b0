from app.economy.entitlements.service import EntitlementService
from app.economy.purchases.service import PurchaseService

__all__ = [
    "EntitlementService",
    "PurchaseService",
]
