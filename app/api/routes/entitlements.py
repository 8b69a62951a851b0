from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.economy.entitlements.errors import InvalidEntitlementKeyError
from app.economy.entitlements.service import EntitlementService
from app.services.caller_auth import CallerAuthenticationError, build_credential_resolver

router = APIRouter(tags=["entitlements"])
logger = structlog.get_logger(__name__)


class EntitlementCheckRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entitlement_key: str | None = Field(default=None, max_length=64)


async def _read_check_request(request: Request) -> EntitlementCheckRequest:
    body = await request.body()
    if not body.strip():
        return EntitlementCheckRequest()
    return EntitlementCheckRequest.model_validate_json(body)


@router.post("/entitlements/check")
async def check_entitlement(request: Request) -> JSONResponse:
    try:
        user_id = build_credential_resolver(get_settings()).resolve_request(request)
    except CallerAuthenticationError as exc:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": str(exc), "entitled": False},
        )

    try:
        payload = await _read_check_request(request)
    except ValidationError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body", "entitled": False},
        )

    entitlement_key = payload.entitlement_key or get_settings().default_entitlement_key
    try:
        async with SessionLocal.begin() as session:
            result = await EntitlementService.check(
                session,
                user_id=user_id,
                entitlement_key=entitlement_key,
                now_utc=datetime.now(timezone.utc),
            )
    except InvalidEntitlementKeyError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid entitlement key", "entitled": False},
        )
    except Exception:
        logger.exception("entitlement_check_failed", user_id=user_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Entitlement check failed", "entitled": False},
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.as_response())
