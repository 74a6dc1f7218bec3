"""create orders, ordered items and payments

Revision ID: 202610190930
Revises: 202610190900
Create Date: 2026-10-19 09:30:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190930"
down_revision = "202610190900"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_type", sa.String(length=20), nullable=False),
        sa.Column("customer_name", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("table_id", sa.Integer(), nullable=True),
        sa.Column("created_staff_id", sa.Integer(), nullable=False),
        sa.Column("updated_staff_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["table_id"], ["restaurant_tables.id"]),
        sa.ForeignKeyConstraint(["created_staff_id"], ["staff.id"]),
        sa.ForeignKeyConstraint(["updated_staff_id"], ["staff.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_created_at_desc", "orders", ["created_at"], unique=False)

    op.create_table(
        "ordered_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity >= 1", name="ck_ordered_items_quantity_positive"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["item_id"], ["menu_items.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ordered_items_order_id", "ordered_items", ["order_id"], unique=False)

    op.create_table(
        "ordered_item_add_ons",
        sa.Column("ordered_item_id", sa.Integer(), nullable=False),
        sa.Column("add_on_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["ordered_item_id"], ["ordered_items.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["add_on_id"], ["add_ons.id"]),
        sa.PrimaryKeyConstraint("ordered_item_id", "add_on_id"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("total_pence", sa.Integer(), nullable=False),
        sa.Column("subtotal_pence", sa.Integer(), nullable=False),
        sa.Column("vat_pence", sa.Integer(), nullable=False),
        sa.Column("service_pence", sa.Integer(), nullable=False),
        sa.Column("method", sa.String(length=20), nullable=False),
        sa.CheckConstraint(
            "total_pence = subtotal_pence + vat_pence + service_pence",
            name="ck_payments_total_matches_breakdown",
        ),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order_id", name="uq_payments_order_id"),
    )


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("ordered_item_add_ons")
    op.drop_index("ix_ordered_items_order_id", table_name="ordered_items")
    op.drop_table("ordered_items")
    op.drop_index("ix_orders_created_at_desc", table_name="orders")
    op.drop_table("orders")
