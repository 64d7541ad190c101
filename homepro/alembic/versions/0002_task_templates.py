"""task templates

Revision ID: 0002_task_templates
Revises: 0001_init
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.orm import Session

from homepro.services.task_templates import seed_system_templates


revision = "0002_task_templates"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "task_templates",
        sa.Column("id", sa.String(length=80), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("base_frequency", sa.String(length=20), nullable=False),
        sa.Column("diy_difficulty", sa.String(length=20), nullable=True),
        sa.Column("cost_range_min", sa.Float(), nullable=True),
        sa.Column("cost_range_max", sa.Float(), nullable=True),
        sa.Column("importance", sa.String(length=20), nullable=True),
        sa.Column("season", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_task_templates_user_id", "task_templates", ["user_id"])
    op.create_index("ix_task_templates_category", "task_templates", ["category"])

    seed_system_templates(Session(bind=op.get_bind()))


def downgrade():
    op.drop_table("task_templates")
