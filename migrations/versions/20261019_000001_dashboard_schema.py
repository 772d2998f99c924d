"""Dashboard schema.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "child",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("avatar_color", sa.String(length=20), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "routine_item_template",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "departure_time",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("departure_time", sa.Time(), nullable=False),
        sa.Column("applicable_days", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "calendar_event",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("starts_at", sa.DateTime(), nullable=False),
        sa.Column("departure_time", sa.DateTime(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_calendar_event_starts_at", "calendar_event", ["starts_at"], unique=False)
    op.create_table(
        "setting",
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("key"),
    )
    op.create_table(
        "routine_item",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("child_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["child_id"], ["child.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_routine_item_child_id", "routine_item", ["child_id"], unique=False)
    op.create_table(
        "event_routine_item",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("eventable_type", sa.String(length=30), nullable=False),
        sa.Column("eventable_id", sa.Integer(), nullable=False),
        sa.Column("child_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["child_id"], ["child.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "eventable_type", "eventable_id", "child_id", "name", name="event_routine_unique"
        ),
    )
    op.create_index("ix_event_routine_item_eventable_id", "event_routine_item", ["eventable_id"], unique=False)
    op.create_index("ix_event_routine_item_child_id", "event_routine_item", ["child_id"], unique=False)
    op.create_table(
        "routine_completion",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("routine_item_id", sa.Integer(), nullable=False),
        sa.Column("completion_date", sa.Date(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["routine_item_id"], ["routine_item.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_routine_completion_routine_item_id", "routine_completion", ["routine_item_id"], unique=False
    )
    op.create_table(
        "event_routine_completion",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_routine_item_id", sa.Integer(), nullable=False),
        sa.Column("completion_date", sa.Date(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["event_routine_item_id"], ["event_routine_item.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_event_routine_completion_event_routine_item_id",
        "event_routine_completion",
        ["event_routine_item_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_event_routine_completion_event_routine_item_id", table_name="event_routine_completion")
    op.drop_table("event_routine_completion")
    op.drop_index("ix_routine_completion_routine_item_id", table_name="routine_completion")
    op.drop_table("routine_completion")
    op.drop_index("ix_event_routine_item_child_id", table_name="event_routine_item")
    op.drop_index("ix_event_routine_item_eventable_id", table_name="event_routine_item")
    op.drop_table("event_routine_item")
    op.drop_index("ix_routine_item_child_id", table_name="routine_item")
    op.drop_table("routine_item")
    op.drop_table("setting")
    op.drop_index("ix_calendar_event_starts_at", table_name="calendar_event")
    op.drop_table("calendar_event")
    op.drop_table("departure_time")
    op.drop_table("routine_item_template")
    op.drop_table("child")
