from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.game.progress_reset.errors import (
    AdminRoleRequiredError,
    ProfileNotFoundError,
    ResetBoundaryError,
)
from app.game.progress_reset.service import ProgressResetService
from app.services.caller_auth import CallerAuthenticationError, build_credential_resolver

router = APIRouter(tags=["admin"])
logger = structlog.get_logger(__name__)


class ProgressResetRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(min_length=1, max_length=64)
    reset_from: Literal["all", "season0", "season1", "season2"]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/admin/progress/reset")
async def reset_progress(request: Request) -> JSONResponse:
    try:
        admin_user_id = build_credential_resolver(get_settings()).resolve_request(request)
    except CallerAuthenticationError as exc:
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    try:
        payload = ProgressResetRequest.model_validate_json(await request.body())
    except ValidationError:
        return _error(status.HTTP_400_BAD_REQUEST, "user_id and reset_from are required")

    try:
        async with SessionLocal.begin() as session:
            result = await ProgressResetService.reset(
                session,
                admin_user_id=admin_user_id,
                target_user_id=payload.user_id,
                reset_from=payload.reset_from,
                now_utc=datetime.now(timezone.utc),
            )
    except ResetBoundaryError:
        return _error(status.HTTP_400_BAD_REQUEST, "Unknown reset boundary")
    except AdminRoleRequiredError:
        return _error(status.HTTP_403_FORBIDDEN, "Admin role required")
    except ProfileNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "Profile not found")
    except Exception:
        logger.exception(
            "progress_reset_failed",
            admin_user_id=admin_user_id,
            target_user_id=payload.user_id,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Progress reset failed")

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.as_response())
