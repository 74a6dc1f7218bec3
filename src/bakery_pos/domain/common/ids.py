from __future__ import annotations

from typing import NewType

StaffId = NewType("StaffId", int)
MenuItemId = NewType("MenuItemId", int)
OrderId = NewType("OrderId", int)
OrderedItemId = NewType("OrderedItemId", int)
WasteId = NewType("WasteId", int)
AuditLogId = NewType("AuditLogId", int)
HeldOrderId = NewType("HeldOrderId", str)
