from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.routes import admin_progress_reset
from app.db.models.missions import Mission
from app.main import app
from tests.game.progress_reset_fixtures import seed_country_progress
from tests.season_fixtures import (
    JWT_AUDIENCE,
    JWT_SECRET,
    bearer,
    count_rows,
    load_profile,
    seed_admin,
    seed_countries,
    seed_profile,
)


def _settings() -> SimpleNamespace:
    return SimpleNamespace(
        auth_jwt_secret=JWT_SECRET,
        auth_jwt_audience=JWT_AUDIENCE,
        auth_jwt_algorithm_list=["HS256"],
    )


@pytest.fixture
def reset_db(monkeypatch, session_factory):
    monkeypatch.setattr(admin_progress_reset, "get_settings", _settings)
    monkeypatch.setattr(admin_progress_reset, "SessionLocal", session_factory)
    return session_factory


async def _post_reset(headers: dict[str, str], json_body: dict[str, object]) -> httpx.Response:
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        return await client.post("/admin/progress/reset", headers=headers, json=json_body)


def test_reset_requires_bearer_token(monkeypatch) -> None:
    monkeypatch.setattr(admin_progress_reset, "get_settings", _settings)

    client = TestClient(app)
    response = client.post("/admin/progress/reset", json={"user_id": "player-1", "reset_from": "all"})

    assert response.status_code == 401


async def test_reset_by_admin_returns_deleted_counts(reset_db) -> None:
    countries = await seed_countries(reset_db)
    await seed_admin(reset_db, "admin-1")
    await seed_profile(reset_db, "player-1", xp=300, level=4)
    await seed_country_progress(reset_db, user_id="player-1", country=countries["CH"], best_score=5)
    await seed_country_progress(reset_db, user_id="player-1", country=countries["IT"], best_score=4)

    response = await _post_reset(bearer("admin-1"), {"user_id": "player-1", "reset_from": "season1"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["deleted"]["missions"] == 1
    assert payload["deleted"]["player_country_progress"] == 1
    assert payload["deleted"]["profile_recalculated"] == 1

    profile = await load_profile(reset_db, "player-1")
    assert profile is not None
    assert profile.xp == 50


async def test_reset_by_non_admin_is_forbidden(reset_db) -> None:
    countries = await seed_countries(reset_db)
    await seed_profile(reset_db, "player-1")
    await seed_country_progress(reset_db, user_id="player-1", country=countries["CH"], best_score=5)

    response = await _post_reset(bearer("player-1"), {"user_id": "player-1", "reset_from": "all"})

    assert response.status_code == 403
    assert await count_rows(reset_db, Mission) == 1


async def test_reset_unknown_profile_is_not_found(reset_db) -> None:
    await seed_admin(reset_db, "admin-1")

    response = await _post_reset(bearer("admin-1"), {"user_id": "ghost", "reset_from": "all"})

    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}


@pytest.mark.parametrize(
    "json_body",
    [
        {"reset_from": "all"},
        {"user_id": "player-1"},
        {"user_id": "player-1", "reset_from": "season9"},
    ],
)
async def test_reset_rejects_invalid_body(reset_db, json_body: dict[str, object]) -> None:
    await seed_admin(reset_db, "admin-1")

    response = await _post_reset(bearer("admin-1"), json_body)

    assert response.status_code == 400
