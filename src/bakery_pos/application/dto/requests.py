from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bakery_pos.domain.common.clock import utc_now
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.staff.entities import StaffRole, latest_allowed_dob

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RequestModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


def _amount(**kwargs):
    # Pence columns are 32-bit integers; 9,999,999.99 is the largest amount stored.
    return Field(ge=0, max_digits=9, decimal_places=2, **kwargs)


class LoginRequest(RequestModel):
    access_code: str = Field(pattern=r"^\d{5}$")


class StaffCreateRequest(RequestModel):
    full_name: str = Field(min_length=1, max_length=100, pattern=r"^[A-Za-z ]+$")
    access_code: str = Field(min_length=1, max_length=10, pattern=r"^[0-9]+$")
    dob: date
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    joined_date: date
    is_active: bool
    role_name: StaffRole
    can_toggle_channel: bool
    can_waste: bool
    can_refund: bool

    @field_validator("dob")
    @classmethod
    def _old_enough(cls, value: date) -> date:
        latest = latest_allowed_dob(utc_now().date())
        if value > latest:
            raise ValueError(f"date of birth must be on or before {latest.isoformat()}")
        return value

    @field_validator("joined_date")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        if value > utc_now().date():
            raise ValueError("joined date cannot be in the future")
        return value


class StaffUpdateRequest(RequestModel):
    is_active: bool | None = None
    can_toggle_channel: bool | None = None
    can_waste: bool | None = None
    can_refund: bool | None = None


class MenuItemCreateRequest(RequestModel):
    item_name: str = Field(min_length=1, max_length=100)
    unit_cost: Decimal = _amount()
    category_name: str = Field(min_length=1, max_length=50)
    is_published: bool = True


class MenuItemUpdateRequest(RequestModel):
    unit_cost: Decimal | None = _amount(default=None)
    is_published: bool | None = None
    is_archived: bool | None = None


class ChannelStatusUpdateRequest(RequestModel):
    is_available: bool


class OrderItemRequest(RequestModel):
    item_id: int
    quantity: int = Field(ge=1)
    add_on_ids: list[int] = Field(default_factory=list)

    @field_validator("add_on_ids")
    @classmethod
    def _distinct_add_ons(cls, value: list[int]) -> list[int]:
        if len(set(value)) != len(value):
            raise ValueError("add-on ids must not repeat within a line")
        return value


class CreateOrderRequest(RequestModel):
    customer_name: str = Field(min_length=1, max_length=100)
    order_type: OrderType
    staff_id: int
    payment_method: PaymentMethod
    total: Decimal = _amount()
    subtotal: Decimal = _amount()
    vat_amount: Decimal = _amount()
    service_amount: Decimal = _amount()
    items: list[OrderItemRequest] = Field(min_length=1)
    table_id: int | None = None


class WasteCreateRequest(RequestModel):
    staff_id: int
    item_id: int | None = None
    item_name: str = Field(min_length=1, max_length=100)
    category_name: str = Field(min_length=1, max_length=50)
    quantity: int = Field(ge=1)
    unit_cost: Decimal = _amount()


class AuditLogCreateRequest(RequestModel):
    staff_id: int
    action: str = Field(min_length=1, max_length=100)
    details: str | None = None
    user_name: str | None = Field(default=None, max_length=100)
    role: str | None = Field(default=None, max_length=50)
