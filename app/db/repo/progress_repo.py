from __future__ import annotations

from collections.abc import Collection
from typing import Any

from sqlalchemy import ColumnElement, delete, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.player_country_progress import PlayerCountryProgress
from app.db.models.user_badges import UserBadge
from app.db.models.user_story_state import UserStoryState


def outside_retained(column: Any, retained: Collection[object]) -> ColumnElement[bool]:
    # Empty retained set keeps nothing.
    if not retained:
        return true()
    return column.not_in(tuple(retained))


class ProgressRepo:
    @staticmethod
    async def delete_outside_retained(
        session: AsyncSession,
        *,
        model: type[Any],
        country_column: Any,
        user_id: str,
        retained: Collection[object],
    ) -> int:
        stmt = (
            delete(model)
            .where(model.user_id == user_id, outside_retained(country_column, retained))
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    async def sum_best_scores(session: AsyncSession, *, user_id: str) -> int:
        stmt = select(func.coalesce(func.sum(PlayerCountryProgress.best_score), 0)).where(
            PlayerCountryProgress.user_id == user_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def delete_story_state(session: AsyncSession, *, user_id: str) -> int:
        stmt = (
            delete(UserStoryState)
            .where(UserStoryState.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    async def delete_badges(session: AsyncSession, *, user_id: str) -> int:
        stmt = (
            delete(UserBadge)
            .where(UserBadge.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
