from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.security_logs import SecurityLogEntry


class SecurityLogsRepo:
    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        event_type: str,
        user_id: str | None,
        stripe_session_id: str | None,
        stripe_customer_id: str | None,
        details: dict[str, object],
        created_at: datetime,
    ) -> SecurityLogEntry:
        entry = SecurityLogEntry(
            event_type=event_type,
            user_id=user_id,
            stripe_session_id=stripe_session_id,
            stripe_customer_id=stripe_customer_id,
            details=details,
            created_at=created_at,
        )
        session.add(entry)
        await session.flush()
        return entry
