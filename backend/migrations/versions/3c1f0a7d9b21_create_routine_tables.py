"""create routines, routine days, assignments and sessions

Revision ID: 3c1f0a7d9b21
Revises:
Create Date: 2025-02-03 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d9b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "workout_routines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False, index=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.String(1024), nullable=True),
        sa.Column("days_per_week", sa.Integer(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "days_per_week IS NULL OR (days_per_week BETWEEN 1 AND 7)",
            name="chk_routine_days_per_week",
        ),
    )

    op.create_table(
        "routine_days",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("routine_id", sa.Integer(), sa.ForeignKey("workout_routines.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_unique_constraint("uq_routine_day_number", "routine_days", ["routine_id", "day_number"])

    op.create_table(
        "client_routine_assignments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("routine_id", sa.Integer(), sa.ForeignKey("workout_routines.id"), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("plan_type", sa.String(16), nullable=False, server_default="strict"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_check_constraint(
        "chk_valid_plan_type",
        "client_routine_assignments",
        "plan_type IN ('strict', 'flexible')",
    )
    op.create_index("ix_assignments_client_active", "client_routine_assignments", ["client_id", "is_active"])

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=False), nullable=True),
        sa.Column("notes", sa.String(2048), nullable=True),
        sa.Column("routine_id", sa.Integer(), sa.ForeignKey("workout_routines.id", ondelete="SET NULL"), nullable=True),
        sa.Column("routine_day_id", sa.Integer(), sa.ForeignKey("routine_days.id", ondelete="SET NULL"), nullable=True),
        sa.Column("assignment_id", sa.Integer(), sa.ForeignKey("client_routine_assignments.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index("ix_workout_sessions_user_start", "workout_sessions", ["user_id", "start_time"])


def downgrade() -> None:
    op.drop_index("ix_workout_sessions_user_start", table_name="workout_sessions")
    op.drop_table("workout_sessions")
    op.drop_index("ix_assignments_client_active", table_name="client_routine_assignments")
    op.drop_constraint("chk_valid_plan_type", "client_routine_assignments", type_="check")
    op.drop_table("client_routine_assignments")
    op.drop_constraint("uq_routine_day_number", "routine_days", type_="unique")
    op.drop_table("routine_days")
    op.drop_table("workout_routines")
