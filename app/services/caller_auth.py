from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import jwt
import structlog
from fastapi import Request
from jwt.exceptions import ExpiredSignatureError, InvalidAudienceError, InvalidTokenError

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


class CallerAuthenticationError(Exception):
    pass


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class BearerCredentialResolver:
    def __init__(
        self,
        *,
        secret: str,
        audience: str | None = None,
        algorithms: Sequence[str] = ("HS256",),
    ) -> None:
        self._secret = secret
        self._audience = audience or None
        self._algorithms = list(algorithms)

    def resolve_user_id(self, token: str | None) -> str:
        if not token:
            raise CallerAuthenticationError("Missing bearer token")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                options={"require": ["sub", "exp"], "verify_aud": self._audience is not None},
            )
        except ExpiredSignatureError as exc:
            raise CallerAuthenticationError("Token expired") from exc
        except InvalidAudienceError as exc:
            raise CallerAuthenticationError("Invalid token audience") from exc
        except InvalidTokenError as exc:
            logger.info("caller_auth_invalid_token", error_type=type(exc).__name__)
            raise CallerAuthenticationError("Invalid token") from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject.strip():
            raise CallerAuthenticationError("Invalid token subject")
        return subject.strip()

    def resolve_request(self, request: Request) -> str:
        return self.resolve_user_id(extract_bearer_token(request.headers.get("Authorization")))


def build_credential_resolver(settings: Any) -> BearerCredentialResolver:
    return BearerCredentialResolver(
        secret=settings.auth_jwt_secret,
        audience=settings.auth_jwt_audience,
        algorithms=settings.auth_jwt_algorithm_list,
    )
