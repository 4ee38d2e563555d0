"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

users, work_sessions, daily_goals, weekly_goals, streaks.
Unique keys double as the upsert keys used by the aggregation pipeline.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("daily_goal_hours", sa.Numeric(4, 2), nullable=False, server_default="2.00"),
        sa.Column("weekly_goal_hours", sa.Numeric(5, 2), nullable=False, server_default="10.00"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # --- work_sessions ---
    op.create_table(
        "work_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(64), nullable=False, server_default="study"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "date", name="uq_work_session_user_date"),
    )
    op.create_index("ix_work_sessions_id", "work_sessions", ["id"])
    op.create_index("ix_work_sessions_user_id", "work_sessions", ["user_id"])
    op.create_index("ix_work_sessions_date", "work_sessions", ["date"])

    # --- daily_goals ---
    op.create_table(
        "daily_goals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("goal_hours", sa.Numeric(4, 2), nullable=False),
        sa.Column("actual_hours", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("goal_met", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_goal_user_date"),
    )
    op.create_index("ix_daily_goals_id", "daily_goals", ["id"])
    op.create_index("ix_daily_goals_user_id", "daily_goals", ["user_id"])
    op.create_index("ix_daily_goals_date", "daily_goals", ["date"])

    # --- weekly_goals ---
    op.create_table(
        "weekly_goals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("week_start", sa.Date(), nullable=False, comment="Monday of the week"),
        sa.Column("week_end", sa.Date(), nullable=False, comment="Sunday of the week"),
        sa.Column("goal_hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("actual_hours", sa.Numeric(6, 2), nullable=False, server_default="0"),
        sa.Column("goal_met", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "week_start", name="uq_weekly_goal_user_week"),
    )
    op.create_index("ix_weekly_goals_id", "weekly_goals", ["id"])
    op.create_index("ix_weekly_goals_user_id", "weekly_goals", ["user_id"])
    op.create_index("ix_weekly_goals_week_start", "weekly_goals", ["week_start"])

    # --- streaks (one row per user) ---
    op.create_table(
        "streaks",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_goal_met_date", sa.Date(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
        sa.CheckConstraint("current_streak >= 0", name="ck_streak_current_non_negative"),
        sa.CheckConstraint("longest_streak >= current_streak", name="ck_streak_longest_ge_current"),
    )


def downgrade() -> None:
    op.drop_table("streaks")
    op.drop_index("ix_weekly_goals_week_start", table_name="weekly_goals")
    op.drop_index("ix_weekly_goals_user_id", table_name="weekly_goals")
    op.drop_index("ix_weekly_goals_id", table_name="weekly_goals")
    op.drop_table("weekly_goals")
    op.drop_index("ix_daily_goals_date", table_name="daily_goals")
    op.drop_index("ix_daily_goals_user_id", table_name="daily_goals")
    op.drop_index("ix_daily_goals_id", table_name="daily_goals")
    op.drop_table("daily_goals")
    op.drop_index("ix_work_sessions_date", table_name="work_sessions")
    op.drop_index("ix_work_sessions_user_id", table_name="work_sessions")
    op.drop_index("ix_work_sessions_id", table_name="work_sessions")
    op.drop_table("work_sessions")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
