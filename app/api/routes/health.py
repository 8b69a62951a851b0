from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy import text

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.workers.celery_app import celery_app

router = APIRouter(tags=["health"])
logger = structlog.get_logger(__name__)

CHECK_TIMEOUT_SECONDS = 3.0


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str) -> dict[str, str]:
    return {"status": "failed", "error": error}


async def _check_database() -> dict[str, Any]:
    async with SessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return _ok_check()


async def _check_redis() -> dict[str, Any]:
    redis_client = Redis.from_url(get_settings().redis_url)
    try:
        pong = await redis_client.ping()
        if pong is not True:
            return _failed_check(f"unexpected redis ping response: {pong!r}")
        return _ok_check()
    finally:
        await redis_client.aclose()


def _check_celery_worker_sync() -> dict[str, Any]:
    inspector = celery_app.control.inspect(timeout=1.0)
    if inspector is None:
        return _failed_check("celery inspector is unavailable")

    replies = inspector.ping() or {}
    if not replies:
        return _failed_check("no celery workers responded to ping")
    return _ok_check({"workers": len(replies)})


async def _check_celery_worker() -> dict[str, Any]:
    return await asyncio.to_thread(_check_celery_worker_sync)


async def _run_check(name: str, check: Callable[[], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    try:
        return await asyncio.wait_for(check(), timeout=CHECK_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning("health_check_timeout", check=name)
        return _failed_check(f"timed out after {CHECK_TIMEOUT_SECONDS}s")
    except Exception as exc:
        logger.warning("health_check_failed", check=name, error_type=type(exc).__name__)
        return _failed_check(str(exc))


async def _collect_checks(*, include_worker: bool) -> dict[str, dict[str, Any]]:
    checks: dict[str, Callable[[], Awaitable[dict[str, Any]]]] = {
        "database": _check_database,
        "redis": _check_redis,
    }
    if include_worker:
        checks["celery"] = _check_celery_worker

    results = await asyncio.gather(*(_run_check(name, check) for name, check in checks.items()))
    return dict(zip(checks.keys(), results))


def _all_checks_ok(checks: dict[str, dict[str, Any]]) -> bool:
    return all(check.get("status") == "ok" for check in checks.values())


@router.get("/live")
async def live() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "live"})


@router.get("/health")
async def health() -> JSONResponse:
    checks = await _collect_checks(include_worker=True)
    is_healthy = _all_checks_ok(checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if is_healthy else "degraded",
            "checks": checks,
        },
    )


@router.get("/ready")
async def ready() -> JSONResponse:
    # The repair sweep is not on the request path, so a missing worker does not block traffic.
    checks = await _collect_checks(include_worker=False)
    is_ready = _all_checks_ok(checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        },
    )
