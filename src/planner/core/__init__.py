"""
Pure planner logic: date arithmetic, list filtering and the calendar grid.

Nothing in this package performs I/O or reads the clock on its own.
"""

from .calendar_grid import (
    MonthCursor,
    MonthLayout,
    bucket_todos_by_day,
    build_month_grid,
    compute_month_layout,
    is_today,
)
from .datemath import DateFlag, SimpleDate, classify_relative_date, prettify, shift_date
from .filtering import (
    DateIndex,
    FilterSettings,
    annotate_for_display,
    filter_by_date,
    filter_by_project,
    run_filter_pipeline,
)

__all__ = [
    "DateFlag",
    "DateIndex",
    "FilterSettings",
    "MonthCursor",
    "MonthLayout",
    "SimpleDate",
    "annotate_for_display",
    "bucket_todos_by_day",
    "build_month_grid",
    "classify_relative_date",
    "compute_month_layout",
    "filter_by_date",
    "filter_by_project",
    "is_today",
    "prettify",
    "run_filter_pipeline",
    "shift_date",
]
