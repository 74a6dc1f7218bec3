from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.infrastructure.db.models.menu import MenuChannelStatusModel, MenuItemModel
from bakery_pos.infrastructure.db.models.staff import StaffModel
from bakery_pos.infrastructure.db.models.table import AddOnModel
from bakery_pos.infrastructure.db.session import get_engine

MENU: list[tuple[str, str, str]] = [
    ("Bread", "Sourdough Loaf", "8.50"),
    ("Bread", "White Bloomer", "4.50"),
    ("Bread", "Rye Bread", "6.00"),
    ("Bread", "Seeded Roll", "1.80"),
    ("Bread", "Focaccia", "5.50"),
    ("Pastry", "Croissant", "2.50"),
    ("Pastry", "Pain au Chocolat", "2.80"),
    ("Pastry", "Almond Danish", "3.20"),
    ("Pastry", "Cinnamon Roll", "3.50"),
    ("Pastry", "Fruit Danish", "3.00"),
    ("Cakes", "Victoria Sponge", "3.80"),
    ("Cakes", "Lemon Drizzle", "3.50"),
    ("Cakes", "Carrot Cake", "4.00"),
    ("Cakes", "Brownie", "2.80"),
    ("Cakes", "Cheesecake", "4.50"),
    ("Drinks", "Americano", "2.80"),
    ("Drinks", "Flat White", "3.20"),
    ("Drinks", "Cappuccino", "3.50"),
    ("Drinks", "Tea", "2.20"),
    ("Drinks", "Fresh OJ", "3.80"),
    ("Savory", "Cheese Twist", "2.20"),
    ("Savory", "Sausage Roll", "3.50"),
    ("Savory", "Ham & Cheese Croissant", "4.50"),
    ("Savory", "Spinach Quiche", "4.80"),
    ("Savory", "Cheese & Onion Pasty", "4.20"),
]

ADD_ONS: list[tuple[str, str]] = [
    ("Extra Shot", "0.50"),
    ("Oat Milk", "0.40"),
    ("Warmed", "0.00"),
]

STAFF: list[dict[str, object]] = [
    {
        "full_name": "Olive Baker",
        "access_code": "10001",
        "dob": date(1985, 4, 12),
        "email": "olive@happyday.example",
        "joined_date": date(2020, 1, 6),
        "role_name": "Owner",
        "can_toggle_channel": True,
        "can_waste": True,
        "can_refund": True,
    },
    {
        "full_name": "Sam Crust",
        "access_code": "20002",
        "dob": date(1999, 9, 3),
        "email": "sam@happyday.example",
        "joined_date": date(2024, 3, 18),
        "role_name": "Staff",
        "can_toggle_channel": False,
        "can_waste": True,
        "can_refund": False,
    },
]


def seed(session: Session) -> int:
    """Insert anything missing from the starter data set; returns rows added."""
    added = 0

    known_codes = set(session.scalars(select(StaffModel.access_code)))
    for row in STAFF:
        if row["access_code"] in known_codes:
            continue
        session.add(StaffModel(is_active=True, **row))
        added += 1

    known_items = set(session.scalars(select(MenuItemModel.name)))
    for category_name, name, price in MENU:
        if name in known_items:
            continue
        session.add(
            MenuItemModel(
                name=name,
                price_pence=Money.from_decimal(Decimal(price)).amount_pence,
                category_name=category_name,
                is_published=True,
                is_archived=False,
                channels=[
                    MenuChannelStatusModel(order_type_id=order_type.channel_id, is_available=True)
                    for order_type in OrderType
                ],
            )
        )
        added += 1

    known_add_ons = set(session.scalars(select(AddOnModel.name)))
    for name, price in ADD_ONS:
        if name in known_add_ons:
            continue
        session.add(AddOnModel(name=name, price_pence=Money.from_decimal(Decimal(price)).amount_pence))
        added += 1

    return added


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    required_tables = {"staff", "menu_items", "menu_channel_statuses", "add_ons"}
    if not required_tables.issubset(set(inspect(engine).get_table_names())):
        print("no schema yet")
        return

    with Session(engine) as session, session.begin():
        added = seed(session)
    print(f"seed complete ({added} rows added)")


if __name__ == "__main__":
    main()
