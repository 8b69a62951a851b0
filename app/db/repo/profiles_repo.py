from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.profiles import Profile


class ProfilesRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_user_id_for_update(session: AsyncSession, user_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def set_entitlement_flags(
        session: AsyncSession,
        *,
        user_id: str,
        season_1_unlocked: bool,
        subscription_type: str,
        now_utc: datetime,
    ) -> int:
        stmt = (
            update(Profile)
            .where(Profile.user_id == user_id)
            .values(
                season_1_unlocked=season_1_unlocked,
                subscription_type=subscription_type,
                updated_at=now_utc,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
