"""season_pass_core_schema

Revision ID: 0001_season_pass_core
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "0001_season_pass_core"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def upgrade() -> None:
    op.create_table(
        "purchases",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("stripe_session_id", sa.String(255), nullable=False),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        sa.Column("stripe_payment_intent_id", sa.String(255), nullable=True),
        sa.Column("tier", sa.String(32), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        _created_at(),
        sa.CheckConstraint("status IN ('completed','refunded','disputed')", name="ck_purchases_status"),
        sa.CheckConstraint("amount >= 0", name="ck_purchases_amount_non_negative"),
        sa.UniqueConstraint("stripe_session_id", name="uq_purchases_stripe_session_id"),
    )
    op.create_index("idx_purchases_user_created", "purchases", ["user_id", "created_at"])
    op.create_index("idx_purchases_customer", "purchases", ["stripe_customer_id"])

    op.create_table(
        "entitlements",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("entitlement_key", sa.String(32), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("source_purchase_id", sa.Uuid(), nullable=True),
        _created_at(),
        _created_at("updated_at"),
        sa.ForeignKeyConstraint(["source_purchase_id"], ["purchases.id"]),
        sa.UniqueConstraint("user_id", "entitlement_key", name="uq_entitlements_user_key"),
    )
    op.create_index("idx_entitlements_purchase", "entitlements", ["source_purchase_id"])

    op.create_table(
        "security_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("event_type", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("stripe_session_id", sa.String(255), nullable=True),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        sa.Column(
            "details",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at(),
        sa.CheckConstraint(
            "event_type IN ('duplicate_session_different_user','customer_id_bound_to_other_user',"
            "'purchase_completed','entitlement_purchase_mismatch','progress_reset',"
            "'entitlement_repaired')",
            name="ck_security_logs_event_type",
        ),
    )
    op.create_index("idx_security_logs_user_created", "security_logs", ["user_id", "created_at"])
    op.create_index("idx_security_logs_type_created", "security_logs", ["event_type", "created_at"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("xp", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("level", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("has_completed_puzzle", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("season_1_unlocked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("subscription_type", sa.String(32), nullable=False, server_default=sa.text("'free'")),
        sa.Column("last_mission_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        _created_at("updated_at"),
        sa.CheckConstraint("xp >= 0", name="ck_profiles_xp_non_negative"),
        sa.CheckConstraint("level >= 1", name="ck_profiles_level_positive"),
        sa.CheckConstraint("streak >= 0", name="ck_profiles_streak_non_negative"),
        sa.CheckConstraint("longest_streak >= 0", name="ck_profiles_longest_streak_non_negative"),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        _created_at(),
        sa.CheckConstraint("role IN ('admin','moderator','user')", name="ck_user_roles_role"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    op.create_table(
        "countries",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("code", sa.String(8), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("season_number", sa.Integer(), nullable=False),
        sa.Column("release_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("season_number >= 0", name="ck_countries_season_non_negative"),
        sa.UniqueConstraint("code", name="uq_countries_code"),
    )
    op.create_index("idx_countries_season_release", "countries", ["season_number", "release_order"])

    op.create_table(
        "missions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_id", sa.Uuid(), nullable=False),
        sa.Column("mission_title", sa.String(255), nullable=False),
        sa.Column("mission_data", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
    )
    op.create_index("idx_missions_user_country", "missions", ["user_id", "country_id"])

    op.create_table(
        "player_country_progress",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_code", sa.String(8), nullable=False),
        sa.Column("best_score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("attempts_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("fragment_granted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at("updated_at"),
        sa.CheckConstraint("best_score >= 0", name="ck_player_country_progress_best_score_non_negative"),
        sa.ForeignKeyConstraint(["country_code"], ["countries.code"]),
        sa.UniqueConstraint("user_id", "country_code", name="uq_player_country_progress_user_country"),
    )

    op.create_table(
        "user_fragments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_id", sa.Uuid(), nullable=False),
        sa.Column("fragment_index", sa.Integer(), nullable=False),
        sa.Column("is_placed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at("obtained_at"),
        sa.Column("placed_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
    )
    op.create_index("idx_user_fragments_user_country", "user_fragments", ["user_id", "country_id"])

    op.create_table(
        "user_tokens",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_code", sa.String(8), nullable=False),
        sa.Column("token_key", sa.String(64), nullable=False),
        _created_at("collected_at"),
        sa.ForeignKeyConstraint(["country_code"], ["countries.code"]),
    )
    op.create_index("idx_user_tokens_user_country", "user_tokens", ["user_id", "country_code"])

    op.create_table(
        "user_progress",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_id", sa.Uuid(), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("best_score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("success", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("fragment_unlocked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("last_attempt_at", sa.DateTime(timezone=True), nullable=True),
        _created_at("updated_at"),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
        sa.UniqueConstraint("user_id", "country_id", name="uq_user_progress_user_country"),
    )

    op.create_table(
        "puzzle_pieces",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("country_id", sa.Uuid(), nullable=False),
        sa.Column("piece_index", sa.Integer(), nullable=False),
        sa.Column("unlocked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
        sa.UniqueConstraint("user_id", "country_id", "piece_index", name="uq_puzzle_pieces_user_piece"),
    )

    op.create_table(
        "user_story_state",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("trust_level", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("suspicion_level", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("secrets_unlocked", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("ending_path", sa.String(32), nullable=True),
        sa.Column("central_dilemma_unlocked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("central_word_validated", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("central_word_attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("central_calcul_step", sa.Integer(), nullable=False, server_default=sa.text("0")),
        _created_at("updated_at"),
        sa.UniqueConstraint("user_id", name="uq_user_story_state_user_id"),
    )

    op.create_table(
        "user_badges",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("badge_key", sa.String(64), nullable=False),
        _created_at("awarded_at"),
        sa.UniqueConstraint("user_id", "badge_key", name="uq_user_badges_user_badge"),
    )


def downgrade() -> None:
    op.drop_table("user_badges")
    op.drop_table("user_story_state")
    op.drop_table("puzzle_pieces")
    op.drop_table("user_progress")
    op.drop_index("idx_user_tokens_user_country", table_name="user_tokens")
    op.drop_table("user_tokens")
    op.drop_index("idx_user_fragments_user_country", table_name="user_fragments")
    op.drop_table("user_fragments")
    op.drop_table("player_country_progress")
    op.drop_index("idx_missions_user_country", table_name="missions")
    op.drop_table("missions")
    op.drop_index("idx_countries_season_release", table_name="countries")
    op.drop_table("countries")
    op.drop_table("user_roles")
    op.drop_table("profiles")
    op.drop_index("idx_security_logs_type_created", table_name="security_logs")
    op.drop_index("idx_security_logs_user_created", table_name="security_logs")
    op.drop_table("security_logs")
    op.drop_index("idx_entitlements_purchase", table_name="entitlements")
    op.drop_table("entitlements")
    op.drop_index("idx_purchases_customer", table_name="purchases")
    op.drop_index("idx_purchases_user_created", table_name="purchases")
    op.drop_table("purchases")
