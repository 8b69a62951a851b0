from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security_events import EVENT_PROGRESS_RESET, emit_security_event
from app.db.repo.countries_repo import CountriesRepo
from app.db.repo.profiles_repo import ProfilesRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.user_roles_repo import UserRolesRepo
from app.game.progress_reset.aggregates import level_for_xp, xp_from_best_scores
from app.game.progress_reset.boundaries import is_full_reset, resolve_retained_seasons
from app.game.progress_reset.errors import AdminRoleRequiredError, ProfileNotFoundError
from app.game.progress_reset.tables import PROGRESS_TABLES
from app.game.progress_reset.types import ProgressResetResult

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "admin"


class ProgressResetService:
    @staticmethod
    async def _ensure_admin(session: AsyncSession, *, admin_user_id: str) -> None:
        if not await UserRolesRepo.has_role(session, user_id=admin_user_id, role=ADMIN_ROLE):
            logger.warning("progress_reset_forbidden", admin_user_id=admin_user_id)
            raise AdminRoleRequiredError

    @staticmethod
    async def _delete_outside_boundary(
        session: AsyncSession,
        *,
        user_id: str,
        retained_seasons: frozenset[int],
    ) -> dict[str, int]:
        countries = await CountriesRepo.list_by_seasons(session, season_numbers=retained_seasons)
        retained_refs = {
            "id": [country.id for country in countries],
            "code": [country.code for country in countries],
        }

        deleted: dict[str, int] = {}
        for table in PROGRESS_TABLES:
            deleted[table.name] = await ProgressRepo.delete_outside_retained(
                session,
                model=table.model,
                country_column=table.column,
                user_id=user_id,
                retained=retained_refs[table.reference],
            )
        return deleted

    @staticmethod
    async def reset(
        session: AsyncSession,
        *,
        admin_user_id: str,
        target_user_id: str,
        reset_from: str,
        now_utc: datetime,
    ) -> ProgressResetResult:
        retained_seasons = resolve_retained_seasons(reset_from)
        await ProgressResetService._ensure_admin(session, admin_user_id=admin_user_id)

        profile = await ProfilesRepo.get_by_user_id_for_update(session, target_user_id)
        if profile is None:
            raise ProfileNotFoundError

        full_reset = is_full_reset(retained_seasons)
        deleted = await ProgressResetService._delete_outside_boundary(
            session,
            user_id=target_user_id,
            retained_seasons=retained_seasons,
        )

        if full_reset:
            xp = 0
            deleted["user_story_state"] = await ProgressRepo.delete_story_state(
                session,
                user_id=target_user_id,
            )
            deleted["user_badges"] = await ProgressRepo.delete_badges(session, user_id=target_user_id)
        else:
            total_best_score = await ProgressRepo.sum_best_scores(session, user_id=target_user_id)
            xp = xp_from_best_scores(total_best_score)

        profile.xp = xp
        profile.level = level_for_xp(xp)
        profile.streak = 0
        profile.longest_streak = 0
        profile.has_completed_puzzle = False
        profile.updated_at = now_utc
        await session.flush()

        deleted["profile_reset" if full_reset else "profile_recalculated"] = 1

        await emit_security_event(
            session,
            event_type=EVENT_PROGRESS_RESET,
            happened_at=now_utc,
            user_id=target_user_id,
            details={
                "admin_user_id": admin_user_id,
                "reset_from": reset_from,
                "retained_seasons": sorted(retained_seasons),
                "deleted": dict(deleted),
                "xp": xp,
                "level": profile.level,
            },
        )
        logger.info(
            "progress_reset_finished",
            admin_user_id=admin_user_id,
            target_user_id=target_user_id,
            reset_from=reset_from,
            deleted=deleted,
        )
        return ProgressResetResult(
            user_id=target_user_id,
            reset_from=reset_from,
            full_reset=full_reset,
            deleted=deleted,
            xp=xp,
            level=profile.level,
        )
