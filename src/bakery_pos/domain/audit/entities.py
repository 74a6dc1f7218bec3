from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from bakery_pos.domain.common.ids import AuditLogId, StaffId


class AuditAction(str, Enum):
    SESSION_STARTED = "Session started"
    SESSION_ENDED = "Session ended"
    PRICE_UPDATED = "Price updated"
    ITEM_PUBLISHED = "Item published"
    ITEM_UNPUBLISHED = "Item unpublished"
    CHANNEL_TOGGLED = "Channel availability changed"
    ITEM_ADDED = "Item added"
    ITEM_ARCHIVED = "Item archived"
    ITEM_RESTORED = "Item restored"
    WASTE_RECORDED = "Waste recorded"
    WASTE_DELETED = "Waste deleted"
    PAYMENT_COMPLETED = "Payment completed"
    ORDER_HELD = "Order held"
    ORDER_CANCELLED = "Order cancelled"
    RATES_UPDATED = "Rates updated"
    CASH_RECONCILED = "EOD cash reconciliation"
    STAFF_REGISTERED = "Staff registered"
    STAFF_ACTIVATED = "Staff activated"
    STAFF_DEACTIVATED = "Staff deactivated"


@dataclass(frozen=True)
class AuditLogEntry:
    log_id: AuditLogId
    staff_id: StaffId
    action: str
    details: str
    user_name: str
    role: str
    timestamp: datetime
