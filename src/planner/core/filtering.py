"""
List-view filtering: project selector, date-range selector, display annotation.

Pure functions - no I/O. Inputs are never mutated; every step returns a new
list, and annotation returns new dicts.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Union

from .datemath import SimpleDate, classify_relative_date, is_iso_date, prettify, shift_date

ALL_PROJECTS = -1

ProjectSelector = Union[int, str]


class DateIndex(str, Enum):
    ALL = "all"
    WEEK = "week"
    DAY = "day"
    PAST = "past"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class FilterSettings:
    """
    The active view's project/date selection.

    project_index is -1 for "All projects".
    """
    project_index: ProjectSelector = ALL_PROJECTS
    date_index: str = DateIndex.ALL.value


def _loose(value: Any) -> Any:
    """
    Normalise numbers and numeric strings so that ``1``, ``"1"`` and ``"1.0"``
    compare equal. Other values are compared as they are.
    """
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return value
    return value


def loose_equals(a: Any, b: Any) -> bool:
    return _loose(a) == _loose(b)


# PUBLIC_INTERFACE
def filter_by_project(todos: Iterable[Mapping[str, Any]], project_index: ProjectSelector) -> List[Mapping[str, Any]]:
    """Keep todos of one project, or all of them when project_index is -1."""
    if loose_equals(project_index, ALL_PROJECTS):
        return list(todos)
    return [t for t in todos if loose_equals(t.get("project_index"), project_index)]


# PUBLIC_INTERFACE
def filter_by_date(
    todos: Iterable[Mapping[str, Any]],
    date_index: str,
    today: SimpleDate,
    legacy_rollover: bool = False,
) -> List[Mapping[str, Any]]:
    """
    Keep todos inside the selected date range.

    - week: today <= due < today + 7
    - day: due == today
    - past: due < today
    - all, or anything unrecognised: no filtering
    """
    todos = list(todos)
    today_str = shift_date(today, 0, legacy_rollover)

    if date_index == DateIndex.WEEK.value:
        one_week = shift_date(today, 7, legacy_rollover)
        return [t for t in todos if _due(t) and today_str <= t["duedate"] < one_week]
    if date_index == DateIndex.DAY.value:
        return [t for t in todos if _due(t) and t["duedate"] == today_str]
    if date_index == DateIndex.PAST.value:
        return [t for t in todos if _due(t) and t["duedate"] < today_str]
    return todos


def _due(todo: Mapping[str, Any]) -> bool:
    return is_iso_date(todo.get("duedate"))


def _sort_key(todo: Mapping[str, Any]) -> str:
    due = todo.get("duedate")
    return due if isinstance(due, str) else ""


# PUBLIC_INTERFACE
def annotate_for_display(
    todos: Iterable[Mapping[str, Any]],
    today: SimpleDate,
    legacy_rollover: bool = False,
) -> List[dict]:
    """
    Sort by due date (stable) and attach ``date_flag`` and ``prettyduedate``.

    Recomputing on already annotated todos gives the same result.
    """
    annotated = []
    for todo in sorted(todos, key=_sort_key):
        due = todo.get("duedate")
        flag = classify_relative_date(due, today, legacy_rollover)
        annotated.append(
            {
                **todo,
                "date_flag": flag.value if flag else None,
                "prettyduedate": prettify(due),
            }
        )
    return annotated


# PUBLIC_INTERFACE
def run_filter_pipeline(
    all_todos: Iterable[Mapping[str, Any]],
    settings: FilterSettings,
    today: SimpleDate,
    legacy_rollover: bool = False,
) -> List[dict]:
    """Project filter, then date filter, then display annotation."""
    by_project = filter_by_project(all_todos, settings.project_index)
    by_date = filter_by_date(by_project, settings.date_index, today, legacy_rollover)
    return annotate_for_display(by_date, today, legacy_rollover)
