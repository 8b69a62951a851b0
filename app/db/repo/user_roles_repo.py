from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_roles import UserRole


class UserRolesRepo:
    @staticmethod
    async def has_role(session: AsyncSession, *, user_id: str, role: str) -> bool:
        stmt = select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
