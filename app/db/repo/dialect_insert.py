from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, entity: Any):
    """INSERT construct with ON CONFLICT support for the session's backend."""
    if session.get_bind().dialect.name == "sqlite":
        return sqlite_insert(entity)
    return postgresql_insert(entity)
