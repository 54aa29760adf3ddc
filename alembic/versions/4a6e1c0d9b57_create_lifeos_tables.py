"""Create tasks, task instances, daily records, finance entries and settings

Revision ID: 4a6e1c0d9b57
Revises:
Create Date: 2026-10-16
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a6e1c0d9b57"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("input_type", sa.String(), nullable=False, server_default="checkbox"),
        sa.Column("recurrence", sa.JSON(), nullable=False),
        sa.Column("reminder", sa.JSON(), nullable=True),
        sa.Column("location_condition", sa.JSON(), nullable=True),
        sa.Column("dropdown_options", sa.JSON(), nullable=True),
        sa.Column("streak_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("importance", sa.String(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_tasks_priority"), "tasks", ["priority"], unique=False)
    op.create_index(op.f("ix_tasks_is_archived"), "tasks", ["is_archived"], unique=False)

    op.create_table(
        "task_instances",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("task_id", sa.String(), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("task_id", "date", name="uq_task_instance_task_date"),
    )
    op.create_index(op.f("ix_task_instances_task_id"), "task_instances", ["task_id"], unique=False)
    op.create_index(op.f("ix_task_instances_date"), "task_instances", ["date"], unique=False)

    op.create_table(
        "daily_records",
        sa.Column("date", sa.Date(), primary_key=True),
        sa.Column("water_intake", sa.Integer(), nullable=True),
        sa.Column("fruit_intake", sa.JSON(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("sleep_hours", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("voice_note_url", sa.String(), nullable=True),
        sa.Column("selfie_url", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
    )

    op.create_table(
        "finance_entries",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
    )
    op.create_index(op.f("ix_finance_entries_date"), "finance_entries", ["date"], unique=False)

    op.create_table(
        "settings",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("current_location", sa.String(), nullable=False, server_default="home"),
        sa.Column("finance_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("default_reminder_time", sa.String(), nullable=True),
        sa.Column("morning_alarm_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("settings")
    op.drop_index(op.f("ix_finance_entries_date"), table_name="finance_entries")
    op.drop_table("finance_entries")
    op.drop_table("daily_records")
    op.drop_index(op.f("ix_task_instances_date"), table_name="task_instances")
    op.drop_index(op.f("ix_task_instances_task_id"), table_name="task_instances")
    op.drop_table("task_instances")
    op.drop_index(op.f("ix_tasks_is_archived"), table_name="tasks")
    op.drop_index(op.f("ix_tasks_priority"), table_name="tasks")
    op.drop_table("tasks")
