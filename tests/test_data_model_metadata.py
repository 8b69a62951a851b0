from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from app.core.security_events import SECURITY_EVENT_TYPES
from app.db.models.base import Base


def _constraint_names(table_name: str, kind: type) -> set[str]:
    table = Base.metadata.tables[table_name]
    return {constraint.name for constraint in table.constraints if isinstance(constraint, kind)}


def test_all_tables_registered() -> None:
    expected_tables = {
        "purchases",
        "entitlements",
        "security_logs",
        "profiles",
        "user_roles",
        "countries",
        "missions",
        "player_country_progress",
        "user_fragments",
        "user_tokens",
        "user_progress",
        "puzzle_pieces",
        "user_story_state",
        "user_badges",
    }
    assert expected_tables == set(Base.metadata.tables)


def test_critical_constraints_present() -> None:
    assert "uq_entitlements_user_key" in _constraint_names("entitlements", UniqueConstraint)
    assert "ck_purchases_status" in _constraint_names("purchases", CheckConstraint)
    assert "uq_user_roles_user_role" in _constraint_names("user_roles", UniqueConstraint)

    session_id_column = Base.metadata.tables["purchases"].c.stripe_session_id
    assert session_id_column.unique is True

    purchase_indexes = {index.name for index in Base.metadata.tables["purchases"].indexes}
    assert "idx_purchases_customer" in purchase_indexes


def test_security_log_check_lists_every_event_type() -> None:
    check = next(
        constraint
        for constraint in Base.metadata.tables["security_logs"].constraints
        if isinstance(constraint, CheckConstraint) and constraint.name == "ck_security_logs_event_type"
    )
    check_sql = str(check.sqltext)
    for event_type in SECURITY_EVENT_TYPES:
        assert f"'{event_type}'" in check_sql
