from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bakery_pos.infrastructure.db.models.menu import Base


class RestaurantTableModel(Base):
    __tablename__ = "restaurant_tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_num: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    table_location: Mapped[str] = mapped_column(String(50), nullable=False)


class AddOnModel(Base):
    __tablename__ = "add_ons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    price_pence: Mapped[int] = mapped_column(Integer, nullable=False)
