from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.entitlements import Entitlement
from app.db.repo.dialect_insert import dialect_insert

ENTITLEMENT_CONFLICT_COLUMNS = ("user_id", "entitlement_key")


class EntitlementsRepo:
    @staticmethod
    async def get_active(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement_key: str,
    ) -> Entitlement | None:
        stmt = select(Entitlement).where(
            Entitlement.user_id == user_id,
            Entitlement.entitlement_key == entitlement_key,
            Entitlement.active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_active_keys(session: AsyncSession, *, user_id: str) -> list[str]:
        stmt = (
            select(Entitlement.entitlement_key)
            .where(
                Entitlement.user_id == user_id,
                Entitlement.active.is_(True),
            )
            .order_by(Entitlement.entitlement_key.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def upsert_active(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement_key: str,
        source_purchase_id: UUID | None,
        now_utc: datetime,
    ) -> None:
        stmt = dialect_insert(session, Entitlement).values(
            id=uuid4(),
            user_id=user_id,
            entitlement_key=entitlement_key,
            active=True,
            source_purchase_id=source_purchase_id,
            created_at=now_utc,
            updated_at=now_utc,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=list(ENTITLEMENT_CONFLICT_COLUMNS),
            set_={
                "active": True,
                "source_purchase_id": stmt.excluded.source_purchase_id,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await session.execute(stmt)

    @staticmethod
    async def insert_if_absent(
        session: AsyncSession,
        *,
        user_id: str,
        entitlement_key: str,
        source_purchase_id: UUID | None,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            dialect_insert(session, Entitlement)
            .values(
                id=uuid4(),
                user_id=user_id,
                entitlement_key=entitlement_key,
                active=True,
                source_purchase_id=source_purchase_id,
                created_at=now_utc,
                updated_at=now_utc,
            )
            .on_conflict_do_nothing(index_elements=list(ENTITLEMENT_CONFLICT_COLUMNS))
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)
