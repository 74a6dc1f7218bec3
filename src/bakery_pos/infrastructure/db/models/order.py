from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bakery_pos.infrastructure.db.models.menu import Base, MenuItemModel


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_type: Mapped[str] = mapped_column(String(20), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    table_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("restaurant_tables.id"),
        nullable=True,
    )
    created_staff_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("staff.id"),
        nullable=False,
    )
    updated_staff_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("staff.id"),
        nullable=False,
    )

    items: Mapped[list["OrderedItemModel"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderedItemModel.id",
    )
    payment: Mapped[PaymentModel | None] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (Index("ix_orders_created_at_desc", "created_at"),)


class OrderedItemModel(Base):
    __tablename__ = "ordered_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("menu_items.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[OrderModel] = relationship(back_populates="items")
    menu_item: Mapped[MenuItemModel | None] = relationship()
    add_ons: Mapped[list["OrderedItemAddOnModel"]] = relationship(
        cascade="all, delete-orphan",
        order_by="OrderedItemAddOnModel.add_on_id",
    )


class OrderedItemAddOnModel(Base):
    __tablename__ = "ordered_item_add_ons"

    ordered_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("ordered_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    add_on_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("add_ons.id"),
        primary_key=True,
    )


class PaymentModel(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    total_pence: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal_pence: Mapped[int] = mapped_column(Integer, nullable=False)
    vat_pence: Mapped[int] = mapped_column(Integer, nullable=False)
    service_pence: Mapped[int] = mapped_column(Integer, nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)

    order: Mapped[OrderModel] = relationship(back_populates="payment")
