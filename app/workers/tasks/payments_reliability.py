from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

import structlog

from app.core.config import get_settings
from app.db.repo.purchases_repo import PurchasesRepo
from app.db.session import SessionLocal
from app.economy.purchases.catalog import tiers_by_entitlement_key
from app.economy.purchases.service import PurchaseService
from app.workers.asyncio_runner import run_async_job
from app.workers.celery_app import celery_app
from app.workers.tasks.payments_reliability_schedule import configure_payments_reliability_schedule

logger = structlog.get_logger(__name__)

REPAIR_STALE_MINUTES = 5


async def _repair_single_purchase(purchase_id: UUID, *, now_utc: datetime) -> str:
    async with SessionLocal.begin() as session:
        return await PurchaseService.repair_purchase_entitlements(
            session,
            purchase_id=purchase_id,
            now_utc=now_utc,
        )


async def repair_missing_entitlements_async(
    *,
    batch_size: int | None = None,
    stale_minutes: int = REPAIR_STALE_MINUTES,
) -> dict[str, int]:
    now_utc = datetime.now(timezone.utc)
    stale_cutoff = now_utc - timedelta(minutes=stale_minutes)
    limit = batch_size if batch_size is not None else get_settings().entitlement_repair_batch_size

    async with SessionLocal.begin() as session:
        candidates = await PurchasesRepo.list_completed_missing_entitlements(
            session,
            tiers_by_key=tiers_by_entitlement_key(),
            older_than_utc=stale_cutoff,
            limit=limit,
        )
        candidate_ids = [purchase.id for purchase in candidates]

    summary: dict[str, int] = {
        "examined": len(candidate_ids),
        "repaired": 0,
        "skipped": 0,
        "missing": 0,
        "errors": 0,
    }

    for purchase_id in candidate_ids:
        try:
            outcome = await _repair_single_purchase(purchase_id, now_utc=now_utc)
        except Exception:
            summary["errors"] += 1
            logger.exception("entitlement_repair_error", purchase_id=str(purchase_id))
            continue

        summary[outcome] = summary.get(outcome, 0) + 1

    if summary["repaired"] > 0 or summary["errors"] > 0:
        logger.warning("entitlement_repair_finished", **summary)
    else:
        logger.info("entitlement_repair_finished", **summary)
    return summary


@celery_app.task(name="app.workers.tasks.payments_reliability.repair_missing_entitlements")
def repair_missing_entitlements(
    batch_size: int | None = None,
    stale_minutes: int = REPAIR_STALE_MINUTES,
) -> dict[str, int]:
    return run_async_job(
        repair_missing_entitlements_async(
            batch_size=batch_size,
            stale_minutes=stale_minutes,
        )
    )


configure_payments_reliability_schedule(celery_app)
