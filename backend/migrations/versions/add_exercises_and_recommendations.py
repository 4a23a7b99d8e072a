from alembic import op
import sqlalchemy as sa
from typing import Union


# revision identifiers, used by Alembic.
revision: str = 'add_exercises_and_recommendations'
down_revision: Union[str, None] = 'add_schedule_skips'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "routine_exercises",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "routine_day_id",
            sa.Integer(),
            sa.ForeignKey("routine_days.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("exercise_name", sa.String(128), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps", sa.String(32), nullable=True),
        sa.Column("weight_suggestion", sa.String(64), nullable=True),
        sa.Column("rest_time_seconds", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("sets IS NULL OR sets >= 1", name="chk_routine_exercise_sets"),
        sa.CheckConstraint(
            "rest_time_seconds IS NULL OR rest_time_seconds >= 0",
            name="chk_routine_exercise_rest",
        ),
    )

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "session_id",
            sa.Integer(),
            sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("exercise_name", sa.String(128), nullable=False),
        sa.Column("notes", sa.String(1024), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
    )

    op.create_table(
        "workout_sets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "workout_exercise_id",
            sa.Integer(),
            sa.ForeignKey("workout_exercises.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("set_number", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("rpe", sa.Integer(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
        sa.UniqueConstraint("workout_exercise_id", "set_number", name="uq_workout_set_number"),
        sa.CheckConstraint("rpe IS NULL OR (rpe BETWEEN 1 AND 10)", name="chk_workout_set_rpe"),
    )

    op.create_table(
        "routine_recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("trainer_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column(
            "routine_id",
            sa.Integer(),
            sa.ForeignKey("workout_routines.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("message", sa.String(1024), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column(
            "assignment_id",
            sa.Integer(),
            sa.ForeignKey("client_routine_assignments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="chk_recommendation_status",
        ),
    )
    op.create_index(
        "ix_recommendations_client_status", "routine_recommendations", ["client_id", "status"]
    )


def downgrade():
    op.drop_index("ix_recommendations_client_status", table_name="routine_recommendations")
    op.drop_table("routine_recommendations")
    op.drop_table("workout_sets")
    op.drop_table("workout_exercises")
    op.drop_table("routine_exercises")
