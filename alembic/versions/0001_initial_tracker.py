"""categories, weekly plan items, plan items and log entries

Revision ID: 0001_initial_tracker
Revises: 
Create Date: 2026-10-19 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_tracker"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("area", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("color", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.UniqueConstraint("user_id", "area", "name", name="uq_categories_user_area_name"),
    )
    op.create_index("ix_categories_id", "categories", ["id"])
    op.create_index("ix_categories_user_id", "categories", ["user_id"])
    op.create_index("ix_categories_user_area_active", "categories", ["user_id", "area", "is_active"])

    op.create_table(
        "weekly_plan_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("area", sa.String(length=16), nullable=False),
        sa.Column("day_of_week", sa.Integer, nullable=False),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("duration_minutes", sa.Integer, nullable=False, server_default="45"),
        sa.Column("intensity", sa.String(length=16), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_weekly_plan_items_day_of_week"),
    )
    op.create_index("ix_weekly_plan_items_id", "weekly_plan_items", ["id"])
    op.create_index("ix_weekly_plan_items_user_id", "weekly_plan_items", ["user_id"])
    op.create_index(
        "ix_weekly_plan_items_user_area_active",
        "weekly_plan_items",
        ["user_id", "area", "is_active"],
    )

    op.create_table(
        "plan_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("area", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("duration_minutes", sa.Integer, nullable=False, server_default="45"),
        sa.Column("intensity", sa.String(length=16), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="planned"),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_plan_items_id", "plan_items", ["id"])
    op.create_index("ix_plan_items_user_id", "plan_items", ["user_id"])
    op.create_index("ix_plan_items_user_date", "plan_items", ["user_id", "date"])

    op.create_table(
        "log_entries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("area", sa.String(length=16), nullable=False),
        sa.Column("date_time", sa.DateTime, nullable=False),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id"), nullable=False),
        sa.Column(
            "weekly_plan_item_id",
            sa.Integer,
            sa.ForeignKey("weekly_plan_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "plan_item_id",
            sa.Integer,
            sa.ForeignKey("plan_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("completion_week_start", sa.Date, nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("duration_minutes", sa.Integer, nullable=False),
        sa.Column("intensity", sa.String(length=16), nullable=True),
        sa.Column("points", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.UniqueConstraint(
            "weekly_plan_item_id",
            "completion_week_start",
            name="uq_log_entries_weekly_item_week",
        ),
    )
    op.create_index("ix_log_entries_id", "log_entries", ["id"])
    op.create_index("ix_log_entries_user_id", "log_entries", ["user_id"])
    op.create_index("ix_log_entries_weekly_plan_item_id", "log_entries", ["weekly_plan_item_id"])
    op.create_index("ix_log_entries_plan_item_id", "log_entries", ["plan_item_id"])
    op.create_index("ix_log_entries_user_date_time", "log_entries", ["user_id", "date_time"])
    op.create_index("ix_log_entries_user_area_date_time", "log_entries", ["user_id", "area", "date_time"])


def downgrade() -> None:
    op.drop_table("log_entries")
    op.drop_table("plan_items")
    op.drop_table("weekly_plan_items")
    op.drop_table("categories")
