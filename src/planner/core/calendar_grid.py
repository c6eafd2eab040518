"""Month calendar grid: layout, per-day bucketing and month navigation."""
from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from .datemath import SimpleDate

# Non-leap table, index 0 unused.
DAYS_IN_MONTH = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

SNIPPET_MAX = 20


def days_in_month(month: int) -> int:
    return DAYS_IN_MONTH[month]


@dataclass(frozen=True)
class MonthLayout:
    leading_blanks: int
    day_count: int


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class MonthCursor:
    """The month shown by the calendar view; navigation returns a new cursor."""
    year: int
    month: int

    @classmethod
    def containing(cls, today: SimpleDate) -> "MonthCursor":
        return cls(year=today.year, month=today.month)

    def previous(self) -> "MonthCursor":
        year, month = self.year, self.month - 1
        if month == 0:
            month = 12
            year -= 1
        return MonthCursor(year=year, month=month)

    def next(self) -> "MonthCursor":
        year, month = self.year, self.month + 1
        if month == 13:
            month = 1
            year += 1
        return MonthCursor(year=year, month=month)


@dataclass
class DayCell:
    day: int
    is_today: bool
    todos: List[dict] = field(default_factory=list)


@dataclass
class MonthGrid:
    year: int
    month: int
    leading_blanks: int
    day_count: int
    days: List[DayCell] = field(default_factory=list)


# PUBLIC_INTERFACE
def compute_month_layout(year: int, month: int) -> MonthLayout:
    """
    Blank cells before day 1 and the number of days, for a Monday-first grid.

    February always has 28 days here.
    """
    # calendar.weekday numbers Monday as 0, which is exactly the blank count
    # on a Monday-first grid (Sunday -> 6).
    leading_blanks = calendar.weekday(year, month, 1)
    return MonthLayout(leading_blanks=leading_blanks, day_count=days_in_month(month))


def _month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}-"


def todos_for_month(todos: Iterable[Mapping[str, Any]], year: int, month: int) -> List[Mapping[str, Any]]:
    prefix = _month_prefix(year, month)
    return [t for t in todos if isinstance(t.get("duedate"), str) and t["duedate"].startswith(prefix)]


def _day_of(todo: Mapping[str, Any]) -> int | None:
    part = todo["duedate"][8:10]
    if len(part) != 2 or not part.isdigit():
        return None
    day = int(part)
    if not 1 <= day <= 31:
        return None
    return day


# PUBLIC_INTERFACE
def bucket_todos_by_day(todos: Iterable[Mapping[str, Any]], year: int, month: int) -> Dict[int, List[Mapping[str, Any]]]:
    """
    Group the todos due in year/month by day of month.

    Todos whose due date has no readable day are left out.
    """
    buckets: Dict[int, List[Mapping[str, Any]]] = defaultdict(list)
    for todo in todos_for_month(todos, year, month):
        day = _day_of(todo)
        if day is None:
            continue
        buckets[day].append(todo)
    return dict(buckets)


# PUBLIC_INTERFACE
def is_today(day: int, year: int, month: int, today: SimpleDate) -> bool:
    return (year, month, day) == (today.year, today.month, today.day)


def calendar_snippet(name: str) -> str:
    """Short label for a calendar tile."""
    if len(name) > SNIPPET_MAX:
        return name[:18] + "..."
    return name


# PUBLIC_INTERFACE
def build_month_grid(todos: Iterable[Mapping[str, Any]], cursor: MonthCursor, today: SimpleDate) -> MonthGrid:
    """
    Lay out one month with its todos.

    One DayCell per day of the month; each todo gains a ``snippet`` label.
    """
    layout = compute_month_layout(cursor.year, cursor.month)
    buckets = bucket_todos_by_day(todos, cursor.year, cursor.month)

    days = []
    for day in range(1, layout.day_count + 1):
        cell_todos = [{**t, "snippet": calendar_snippet(str(t.get("name", "")))} for t in buckets.get(day, [])]
        days.append(DayCell(day=day, is_today=is_today(day, cursor.year, cursor.month, today), todos=cell_todos))

    return MonthGrid(
        year=cursor.year,
        month=cursor.month,
        leading_blanks=layout.leading_blanks,
        day_count=layout.day_count,
        days=days,
    )
