from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum


class InvalidPeriodError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.details = {"fields": {"period": [message]}}


class Period(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | None) -> Period:
        if value is None or value == "":
            return cls.TODAY
        try:
            return cls(value.lower())
        except ValueError as exc:
            allowed = ", ".join(period.value for period in cls)
            raise InvalidPeriodError(f"unknown period {value!r}; expected one of {allowed}") from exc


def period_window(period: Period, now: datetime) -> tuple[datetime | None, datetime | None]:
    """Half-open ``[start, end)`` window in UTC; ``None`` means unbounded."""
    now = now.astimezone(timezone.utc)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if period is Period.TODAY:
        return midnight, midnight + timedelta(days=1)
    if period is Period.WEEK:
        return now - timedelta(days=7), None
    if period is Period.MONTH:
        start = midnight.replace(day=1)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return start, end
    if period is Period.YEAR:
        start = midnight.replace(month=1, day=1)
        return start, start.replace(year=start.year + 1)
    return None, None
