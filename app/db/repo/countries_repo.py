from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.countries import Country


class CountriesRepo:
    @staticmethod
    async def list_by_seasons(session: AsyncSession, *, season_numbers: Collection[int]) -> list[Country]:
        if not season_numbers:
            return []
        stmt = (
            select(Country)
            .where(Country.season_number.in_(tuple(season_numbers)))
            .order_by(Country.season_number.asc(), Country.release_order.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
