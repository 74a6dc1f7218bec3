from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bakery_pos.domain.common.ids import MenuItemId, StaffId, WasteId
from bakery_pos.domain.common.money import Money


@dataclass(frozen=True)
class WasteEntry:
    waste_id: WasteId
    staff_id: StaffId
    item_id: MenuItemId | None
    item_name: str
    category_name: str
    quantity: int
    unit_cost: Money
    recorded_at: datetime
    recorded_by: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def total_cost(self) -> Money:
        return self.unit_cost.times(self.quantity)
