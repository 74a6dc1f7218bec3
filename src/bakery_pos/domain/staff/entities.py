from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from bakery_pos.domain.common.ids import StaffId

ACCESS_CODE_PATTERN = re.compile(r"^\d{5}$")
MINIMUM_AGE_YEARS = 15


class StaffRole(str, Enum):
    STAFF = "Staff"
    MANAGER = "Manager"
    OWNER = "Owner"


@dataclass(frozen=True)
class Actor:
    """Name and role as they were when an action happened."""

    staff_id: StaffId
    full_name: str
    role_name: str


@dataclass(frozen=True)
class Staff:
    staff_id: StaffId
    full_name: str
    access_code: str
    dob: date
    email: str
    joined_date: date
    is_active: bool
    role_name: StaffRole
    can_toggle_channel: bool
    can_waste: bool
    can_refund: bool
    created_at: datetime
    updated_at: datetime

    def as_actor(self) -> Actor:
        return Actor(
            staff_id=self.staff_id,
            full_name=self.full_name,
            role_name=self.role_name.value,
        )


def latest_allowed_dob(today: date) -> date:
    return date(today.year - MINIMUM_AGE_YEARS, 12, 31)
