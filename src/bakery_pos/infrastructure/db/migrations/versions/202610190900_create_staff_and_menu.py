"""create staff and menu tables

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "staff",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("access_code", sa.String(length=10), nullable=False),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("joined_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("role_name", sa.String(length=30), nullable=False),
        sa.Column("can_toggle_channel", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("can_waste", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("can_refund", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("access_code", name="uq_staff_access_code"),
    )

    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("price_pence", sa.Integer(), nullable=False),
        sa.Column("category_name", sa.String(length=50), nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("is_archived", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("price_pence >= 0", name="ck_menu_items_price_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_menu_items_category_name",
        "menu_items",
        ["category_name"],
        unique=False,
    )

    op.create_table(
        "menu_channel_statuses",
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("order_type_id", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["item_id"], ["menu_items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("item_id", "order_type_id"),
    )

    op.create_table(
        "restaurant_tables",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("table_num", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("table_location", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("table_num", name="uq_restaurant_tables_table_num"),
    )

    op.create_table(
        "add_ons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("price_pence", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("add_ons")
    op.drop_table("restaurant_tables")
    op.drop_table("menu_channel_statuses")
    op.drop_index("ix_menu_items_category_name", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_table("staff")
