from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class StaffResponse(BaseModel):
    staff_id: int
    full_name: str
    access_code: str
    dob: date
    email: str
    joined_date: date
    is_active: bool
    role_name: str
    can_toggle_channel: bool
    can_waste: bool
    can_refund: bool
    created_at: datetime
    updated_at: datetime


class ChannelResponse(BaseModel):
    order_type_id: int
    is_available: bool


class MenuItemResponse(BaseModel):
    id: int
    name: str
    price: float
    category_name: str
    is_published: bool
    is_archived: bool
    channels: list[ChannelResponse] = Field(default_factory=list)


class ChannelStatusResponse(BaseModel):
    item_id: int
    order_type_id: int
    is_available: bool


class OrderItemResponse(BaseModel):
    item_id: int
    name: str
    price: float
    qty: int
    add_on_ids: list[int] = Field(default_factory=list)


class PaymentResponse(BaseModel):
    total: float
    subtotal: float
    vat_amount: float
    service_amount: float
    method: str


class OrderResponse(BaseModel):
    order_id: int
    customer_name: str
    order_type: str
    status: str
    paid_at: datetime
    created_at: datetime
    staff_id: int
    table_id: int | None = None
    items: list[OrderItemResponse] = Field(default_factory=list)
    payment: PaymentResponse | None = None


class WasteResponse(BaseModel):
    id: int
    item_id: int | None = None
    item_name: str
    category_name: str
    qty: int
    unit_cost: float
    recorded_by: str
    recorded_at: datetime


class AuditLogResponse(BaseModel):
    id: int
    timestamp: datetime
    user_id: int
    user_name: str
    role: str
    action: str
    details: str


class DeletedResponse(BaseModel):
    deleted: bool
