from __future__ import annotations

import hashlib
import hmac
import json
import time
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.models.countries import Country
from app.db.models.entitlements import Entitlement
from app.db.models.profiles import Profile
from app.db.models.purchases import Purchase
from app.db.models.security_logs import SecurityLogEntry
from app.db.models.user_roles import UserRole

JWT_SECRET = "test-jwt-secret"
JWT_AUDIENCE = "authenticated"
WEBHOOK_SECRET = "whsec_test_secret"
NOW_UTC = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

# (code, season_number, release_order)
COUNTRY_CATALOG = (
    ("CH", 0, 1),
    ("FR", 1, 1),
    ("DE", 1, 2),
    ("IT", 2, 1),
    ("ES", 3, 1),
)


def issue_token(
    user_id: str,
    *,
    secret: str = JWT_SECRET,
    audience: str | None = JWT_AUDIENCE,
    expires_in: timedelta = timedelta(minutes=5),
) -> str:
    claims: dict[str, object] = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if audience is not None:
        claims["aud"] = audience
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(user_id: str, **kwargs: object) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user_id, **kwargs)}"}


def sign_payload(payload: str, *, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    signed_at = timestamp if timestamp is not None else int(time.time())
    signature = hmac.new(
        secret.encode("utf-8"),
        f"{signed_at}.{payload}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={signed_at},v1={signature}"


def checkout_event(
    *,
    session_id: str = "cs_test_1",
    user_id: str | None = "user-a",
    tier: str | None = "season_1",
    customer: str | None = "cus_a",
    amount_total: int | None = 2900,
    currency: str | None = "chf",
) -> dict[str, object]:
    metadata: dict[str, str] = {}
    if user_id is not None:
        metadata["user_id"] = user_id
    if tier is not None:
        metadata["tier"] = tier
    return {
        "id": f"evt_{session_id}",
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": session_id,
                "customer": customer,
                "payment_intent": f"pi_{session_id}",
                "amount_total": amount_total,
                "currency": currency,
                "metadata": metadata,
            }
        },
    }


def encode_event(event: dict[str, object]) -> str:
    return json.dumps(event, separators=(",", ":"))


async def seed_profile(session_factory: async_sessionmaker[AsyncSession], user_id: str, **values: object) -> None:
    async with session_factory.begin() as session:
        session.add(Profile(user_id=user_id, display_name=user_id, **values))


async def seed_admin(session_factory: async_sessionmaker[AsyncSession], user_id: str) -> None:
    async with session_factory.begin() as session:
        session.add(UserRole(user_id=user_id, role="admin"))


async def seed_countries(session_factory: async_sessionmaker[AsyncSession]) -> dict[str, Country]:
    countries: dict[str, Country] = {}
    async with session_factory.begin() as session:
        for code, season_number, release_order in COUNTRY_CATALOG:
            country = Country(
                code=code,
                name=code,
                season_number=season_number,
                release_order=release_order,
            )
            session.add(country)
            countries[code] = country
        await session.flush()
    return countries


async def seed_purchase(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    user_id: str,
    stripe_session_id: str,
    tier: str = "season_1",
    status: str = "completed",
    stripe_customer_id: str | None = None,
    created_at: datetime = NOW_UTC,
) -> UUID:
    async with session_factory.begin() as session:
        purchase = Purchase(
            user_id=user_id,
            stripe_session_id=stripe_session_id,
            stripe_customer_id=stripe_customer_id,
            tier=tier,
            amount=2900,
            currency="chf",
            status=status,
            created_at=created_at,
        )
        session.add(purchase)
        await session.flush()
        return purchase.id


async def seed_entitlement(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    user_id: str,
    entitlement_key: str,
    source_purchase_id: UUID | None,
    active: bool = True,
) -> None:
    async with session_factory.begin() as session:
        session.add(
            Entitlement(
                user_id=user_id,
                entitlement_key=entitlement_key,
                active=active,
                source_purchase_id=source_purchase_id,
                created_at=NOW_UTC,
                updated_at=NOW_UTC,
            )
        )


async def load_entitlements(session_factory: async_sessionmaker[AsyncSession], user_id: str) -> dict[str, Entitlement]:
    async with session_factory() as session:
        result = await session.execute(select(Entitlement).where(Entitlement.user_id == user_id))
        return {row.entitlement_key: row for row in result.scalars().all()}


async def load_profile(session_factory: async_sessionmaker[AsyncSession], user_id: str) -> Profile | None:
    async with session_factory() as session:
        result = await session.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()


async def load_security_events(
    session_factory: async_sessionmaker[AsyncSession],
    event_type: str | None = None,
) -> list[SecurityLogEntry]:
    stmt = select(SecurityLogEntry).order_by(SecurityLogEntry.created_at.asc())
    if event_type is not None:
        stmt = stmt.where(SecurityLogEntry.event_type == event_type)
    async with session_factory() as session:
        result = await session.execute(stmt)
        return list(result.scalars().all())


async def count_rows(session_factory: async_sessionmaker[AsyncSession], model: type) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return int(result.scalar_one())
