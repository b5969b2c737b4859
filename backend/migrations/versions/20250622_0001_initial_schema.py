"""initial schema: committees, periods, possible and submitted tasks

Revision ID: 20250622_0001
Revises:
Create Date: 2025-06-22 13:46:18

"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20250622_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "committees",
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("name", name="pk_committees"),
    )
    op.create_table(
        "periods",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_periods"),
        sa.UniqueConstraint("name", name="uq_periods_name"),
        sa.CheckConstraint("start_date <= end_date", name="ck_periods_start_before_end"),
    )
    op.create_table(
        "possible_tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("short_description", sa.String(length=50), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("max_per_period", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_possible_tasks"),
        sa.UniqueConstraint("description", name="uq_possible_tasks_description"),
        sa.CheckConstraint("points BETWEEN 1 AND 100", name="ck_possible_tasks_points_range"),
    )
    op.create_table(
        "submitted_tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("possible_task_id", sa.Uuid(), nullable=False),
        sa.Column("committee", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("image_path", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("rejection_reason", sa.String(length=500), nullable=True),
        sa.Column("max_per_period", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_submitted_tasks"),
        sa.ForeignKeyConstraint(
            ["possible_task_id"], ["possible_tasks.id"], name="fk_submitted_tasks_possible_task_id_possible_tasks"
        ),
        sa.ForeignKeyConstraint(
            ["committee"], ["committees.name"], onupdate="CASCADE", name="fk_submitted_tasks_committee_committees"
        ),
        sa.CheckConstraint("points BETWEEN 1 AND 100", name="ck_submitted_tasks_points_range"),
        sa.CheckConstraint(
            "(status = 'rejected' AND rejection_reason IS NOT NULL) "
            "OR (status <> 'rejected' AND rejection_reason IS NULL)",
            name="ck_submitted_tasks_reason_iff_rejected",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name="ck_submitted_tasks_status_values"
        ),
    )
    op.create_index("ix_submitted_tasks_possible_task_id", "submitted_tasks", ["possible_task_id"])
    op.create_index("ix_submitted_tasks_committee", "submitted_tasks", ["committee"])
    op.create_index("ix_submitted_tasks_submitted_at", "submitted_tasks", ["submitted_at"])

def downgrade() -> None:
    op.drop_index("ix_submitted_tasks_submitted_at", table_name="submitted_tasks")
    op.drop_index("ix_submitted_tasks_committee", table_name="submitted_tasks")
    op.drop_index("ix_submitted_tasks_possible_task_id", table_name="submitted_tasks")
    op.drop_table("submitted_tasks")
    op.drop_table("possible_tasks")
    op.drop_table("periods")
    op.drop_table("committees")
