"""
Calendar-relative date strings computed with plain day/month/year arithmetic.

Dates are produced as zero-padded ``YYYY-MM-DD`` strings so that relative
comparisons can be done lexicographically. February is always treated as
28 days; leap years are not recognised.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

THIRTY_DAY_MONTHS = (4, 6, 9, 11)

# Index 0 and 13 are never reached for valid months.
MONTH_ABBREVIATIONS = (
    "Dec", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class DateFlag(str, Enum):
    """Relative-date classification used for display emphasis."""

    TODAY = "Today"
    TOMORROW = "Tomorrow"
    DAY_AFTER_TOMORROW = "DayAfterTomorrow"
    PAST = "Past"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SimpleDate:
    """
    A calendar date as separate integer fields.

    Used as the injected "today" for every relative computation.
    """
    day: int
    month: int
    year: int

    @classmethod
    def from_date(cls, value: date) -> "SimpleDate":
        return cls(day=value.day, month=value.month, year=value.year)

    @classmethod
    def today(cls) -> "SimpleDate":
        """Read the system clock. Only the HTTP layer should call this."""
        return cls.from_date(date.today())

    def isoformat(self) -> str:
        return format_date(self.year, self.month, self.day)


def format_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def is_iso_date(value: Any) -> bool:
    """True when value is a string shaped like ``YYYY-MM-DD``."""
    return isinstance(value, str) and bool(_ISO_DATE.match(value))


# PUBLIC_INTERFACE
def shift_date(base: SimpleDate, interval_days: int, legacy_rollover: bool = False) -> str:
    """
    Return ``base`` plus ``interval_days`` as a ``YYYY-MM-DD`` string.

    At most one month boundary is crossed per call and negative intervals do
    not borrow from the previous month (day ``00`` is possible for -1 on the
    1st). Rollover rules are checked in order: February (28 days), 30-day
    months, December (rolls the year), then any other month.

    Args:
        base: The starting date.
        interval_days: Days to add.
        legacy_rollover: Apply the historical rule for 31-day months other than
            December, which rolls over one day early and subtracts 30.

    Returns:
        The shifted date, zero-padded.
    """
    day, month, year = base.day, base.month, base.year
    offset = interval_days - 1

    if month == 2 and day >= 28 - offset:
        day = day + interval_days - 28
        month += 1
    elif month in THIRTY_DAY_MONTHS and day >= 30 - offset:
        day = day + interval_days - 30
        month += 1
    elif month == 12 and day >= 31 - offset:
        day = day + interval_days - 31
        month = 1
        year += 1
    elif legacy_rollover and day >= 30 - offset:
        day = day + interval_days - 30
        month += 1
    elif not legacy_rollover and day >= 31 - offset:
        day = day + interval_days - 31
        month += 1
    else:
        day = day + interval_days

    return format_date(year, month, day)


# PUBLIC_INTERFACE
def classify_relative_date(
    due: Any, today: SimpleDate, legacy_rollover: bool = False
) -> Optional[DateFlag]:
    """
    Classify a due date relative to today.

    Returns None for dates beyond the day after tomorrow and for anything that
    is not a ``YYYY-MM-DD`` string.
    """
    if not is_iso_date(due):
        return None

    today_str = shift_date(today, 0, legacy_rollover)
    if due == today_str:
        return DateFlag.TODAY
    if due == shift_date(today, 1, legacy_rollover):
        return DateFlag.TOMORROW
    if due == shift_date(today, 2, legacy_rollover):
        return DateFlag.DAY_AFTER_TOMORROW
    if due < today_str:
        return DateFlag.PAST
    return None


# PUBLIC_INTERFACE
def prettify(due: Any) -> Any:
    """
    Reformat ``YYYY-MM-DD`` as ``DD Mon  'YY`` (two no-break spaces).

    Values that cannot be reformatted are returned unchanged.
    """
    if not is_iso_date(due):
        return due
    year, month, day = due.split("-")
    month_number = int(month)
    if not 1 <= month_number <= 12:
        return due
    return f"{day} {MONTH_ABBREVIATIONS[month_number]}\u00a0\u00a0'{year[2:4]}"
