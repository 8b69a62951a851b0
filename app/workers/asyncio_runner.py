from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from app.db.session import dispose_engine

T = TypeVar("T")


async def _run_with_fresh_db_pool(job: Coroutine[Any, Any, T]) -> T:
    # Pooled connections are bound to the loop that opened them.
    await dispose_engine()
    try:
        return await job
    finally:
        await dispose_engine()


def run_async_job(job: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(_run_with_fresh_db_pool(job))
