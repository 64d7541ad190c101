# homepro/domain/recurrence.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional, TypeVar

D = TypeVar("D", date, datetime)

# standard frequency -> months to add (WEEKLY is handled in days)
FREQUENCY_MONTHS: dict[str, int] = {
    "MONTHLY": 1,
    "QUARTERLY": 3,
    "BIANNUAL": 6,
    "ANNUAL": 12,
    "SEASONAL": 3,
    "AS_NEEDED": 6,
}

FREQUENCY_LABELS: dict[str, str] = {
    "WEEKLY": "Weekly",
    "MONTHLY": "Monthly",
    "QUARTERLY": "Every 3 months",
    "BIANNUAL": "Every 6 months",
    "ANNUAL": "Annually",
    "SEASONAL": "Seasonally",
    "AS_NEEDED": "As needed",
}

RECURRENCE_UNITS = ("days", "weeks", "months")


@dataclass(frozen=True)
class CustomRecurrence:
    interval: int
    unit: str  # days|weeks|months

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> Optional["CustomRecurrence"]:
        if not raw:
            return None
        interval = raw.get("interval")
        if interval is None:
            return None
        return cls(interval=int(interval), unit=str(raw.get("unit") or "days"))


def add_months(d: D, months: int) -> D:
    """Calendar month arithmetic; the day is clamped to the end of the target month."""
    total = d.month - 1 + months
    year = d.year + total // 12
    month = total % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def calculate_next_due_date(
    frequency: str,
    base: D,
    custom: Optional[CustomRecurrence | Mapping[str, Any]] = None,
) -> D:
    """
    Next due date after `base`.

    A custom {interval, unit} recurrence wins over the frequency. Unknown
    units are treated as days; unknown frequencies as monthly.
    """
    if custom is not None and not isinstance(custom, CustomRecurrence):
        custom = CustomRecurrence.from_mapping(custom)

    if custom is not None and custom.interval:
        if custom.unit == "weeks":
            return base + timedelta(days=7 * custom.interval)
        if custom.unit == "months":
            return add_months(base, custom.interval)
        return base + timedelta(days=custom.interval)

    freq = (frequency or "").upper()
    if freq == "WEEKLY":
        return base + timedelta(days=7)
    return add_months(base, FREQUENCY_MONTHS.get(freq, 1))


def format_recurrence(
    frequency: str,
    custom: Optional[CustomRecurrence | Mapping[str, Any]] = None,
) -> str:
    if custom is not None and not isinstance(custom, CustomRecurrence):
        custom = CustomRecurrence.from_mapping(custom)

    if custom is not None and custom.interval:
        unit = custom.unit if custom.unit in RECURRENCE_UNITS else "days"
        noun = unit[:-1] if custom.interval == 1 else unit
        return f"Every {custom.interval} {noun}"

    return FREQUENCY_LABELS.get((frequency or "").upper(), frequency)
