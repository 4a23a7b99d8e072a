from alembic import op
import sqlalchemy as sa
from typing import Union


# revision identifiers, used by Alembic.
revision: str = 'add_schedule_skips'
down_revision: Union[str, None] = '3c1f0a7d9b21'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "schedule_skips",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column(
            "assignment_id",
            sa.Integer(),
            sa.ForeignKey("client_routine_assignments.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_unique_constraint(
        "uq_schedule_skip",
        "schedule_skips",
        ["client_id", "assignment_id", "scheduled_date"],
    )
    op.create_index("ix_schedule_skips_client", "schedule_skips", ["client_id", "scheduled_date"])


def downgrade():
    op.drop_index("ix_schedule_skips_client", table_name="schedule_skips")
    op.drop_constraint("uq_schedule_skip", "schedule_skips", type_="unique")
    op.drop_table("schedule_skips")
