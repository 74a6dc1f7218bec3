from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class MenuItemModel(Base):
    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price_pence: Mapped[int] = mapped_column(Integer, nullable=False)
    category_name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    channels: Mapped[list["MenuChannelStatusModel"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="MenuChannelStatusModel.order_type_id",
    )


class MenuChannelStatusModel(Base):
    __tablename__ = "menu_channel_statuses"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    order_type_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    item: Mapped[MenuItemModel] = relationship(back_populates="channels")
