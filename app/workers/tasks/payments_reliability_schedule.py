from __future__ import annotations

ENTITLEMENT_REPAIR_INTERVAL_SECONDS = 900.0


def configure_payments_reliability_schedule(celery_app) -> None:
    celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
    celery_app.conf.beat_schedule.update(
        {
            "repair-missing-entitlements-every-15-minutes": {
                "task": "app.workers.tasks.payments_reliability.repair_missing_entitlements",
                "schedule": ENTITLEMENT_REPAIR_INTERVAL_SECONDS,
                "options": {"queue": "q_normal"},
            },
        }
    )
