from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest

from app.services.caller_auth import (
    BearerCredentialResolver,
    CallerAuthenticationError,
    build_credential_resolver,
    extract_bearer_token,
)
from tests.season_fixtures import JWT_AUDIENCE, JWT_SECRET, issue_token


def _resolver() -> BearerCredentialResolver:
    return BearerCredentialResolver(secret=JWT_SECRET, audience=JWT_AUDIENCE)


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def", "abc.def"),
        ("bearer abc.def", "abc.def"),
        ("Bearer   ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header: str | None, expected: str | None) -> None:
    assert extract_bearer_token(header) == expected


def test_valid_token_resolves_subject() -> None:
    assert _resolver().resolve_user_id(issue_token("user-a")) == "user-a"


def test_missing_token_is_rejected() -> None:
    with pytest.raises(CallerAuthenticationError):
        _resolver().resolve_user_id(None)


def test_expired_token_is_rejected() -> None:
    token = issue_token("user-a", expires_in=timedelta(minutes=-5))

    with pytest.raises(CallerAuthenticationError, match="expired"):
        _resolver().resolve_user_id(token)


def test_wrong_secret_is_rejected() -> None:
    with pytest.raises(CallerAuthenticationError):
        _resolver().resolve_user_id(issue_token("user-a", secret="other-secret"))


def test_wrong_audience_is_rejected() -> None:
    with pytest.raises(CallerAuthenticationError):
        _resolver().resolve_user_id(issue_token("user-a", audience="service_role"))


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode({"exp": 4102444800, "aud": JWT_AUDIENCE}, JWT_SECRET, algorithm="HS256")

    with pytest.raises(CallerAuthenticationError):
        _resolver().resolve_user_id(token)


def test_resolver_is_built_from_settings() -> None:
    resolver = build_credential_resolver(
        SimpleNamespace(
            auth_jwt_secret=JWT_SECRET,
            auth_jwt_audience=JWT_AUDIENCE,
            auth_jwt_algorithm_list=["HS256"],
        )
    )

    assert resolver.resolve_user_id(issue_token("user-z")) == "user-z"
