from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.entitlements import Entitlement
from app.db.models.purchases import Purchase


class PurchasesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, purchase_id: UUID) -> Purchase | None:
        return await session.get(Purchase, purchase_id)

    @staticmethod
    async def get_by_session_id(session: AsyncSession, stripe_session_id: str) -> Purchase | None:
        stmt = select(Purchase).where(Purchase.stripe_session_id == stripe_session_id).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_customer_purchase_of_other_user(
        session: AsyncSession,
        *,
        stripe_customer_id: str,
        user_id: str,
    ) -> Purchase | None:
        stmt = (
            select(Purchase)
            .where(
                Purchase.stripe_customer_id == stripe_customer_id,
                Purchase.user_id != user_id,
            )
            .order_by(Purchase.created_at.asc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, purchase: Purchase) -> Purchase:
        session.add(purchase)
        await session.flush()
        return purchase

    @staticmethod
    async def list_completed_missing_entitlements(
        session: AsyncSession,
        *,
        tiers_by_key: Mapping[str, Sequence[str]],
        older_than_utc: datetime,
        limit: int = 200,
    ) -> list[Purchase]:
        missing_key_conditions = [
            and_(
                Purchase.tier.in_(tuple(tiers)),
                ~exists().where(
                    Entitlement.user_id == Purchase.user_id,
                    Entitlement.entitlement_key == entitlement_key,
                ),
            )
            for entitlement_key, tiers in tiers_by_key.items()
            if tiers
        ]
        if not missing_key_conditions:
            return []

        stmt = (
            select(Purchase)
            .where(
                Purchase.status == "completed",
                Purchase.created_at <= older_than_utc,
                or_(*missing_key_conditions),
            )
            .order_by(Purchase.created_at.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
