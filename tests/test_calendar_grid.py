"""Tests for the month calendar grid."""

import pytest

from planner.core.calendar_grid import (
    MonthCursor,
    bucket_todos_by_day,
    build_month_grid,
    calendar_snippet,
    compute_month_layout,
    is_today,
    todos_for_month,
)
from planner.core.datemath import SimpleDate


def todo(id, duedate, name="Task", project_index=0):
    return {"id": id, "project_index": project_index, "todo_index": id, "name": name, "duedate": duedate}


class TestComputeMonthLayout:
    def test_day_counts_ignore_leap_years(self):
        assert compute_month_layout(2024, 2).day_count == 28
        assert compute_month_layout(2023, 2).day_count == 28

    def test_day_count_table(self):
        counts = [compute_month_layout(2023, m).day_count for m in range(1, 13)]
        assert counts == [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

    @pytest.mark.parametrize(
        "year, month, blanks",
        [
            (2023, 5, 0),   # starts on a Monday
            (2023, 8, 1),   # Tuesday
            (2023, 9, 4),   # Friday
            (2023, 10, 6),  # Sunday
        ],
    )
    def test_leading_blanks_monday_first(self, year, month, blanks):
        assert compute_month_layout(year, month).leading_blanks == blanks

    def test_distant_years(self):
        layout = compute_month_layout(12023, 8)
        assert 0 <= layout.leading_blanks <= 6
        assert layout.day_count == 31


class TestBucketTodosByDay:
    def test_groups_by_day_for_matching_month(self):
        todos = [todo(1, "2023-08-16"), todo(2, "2023-08-16"), todo(3, "2023-08-01")]
        buckets = bucket_todos_by_day(todos, 2023, 8)
        assert sorted(buckets) == [1, 16]
        assert [t["id"] for t in buckets[16]] == [1, 2]

    def test_other_months_and_years_are_omitted(self):
        todos = [todo(1, "2023-08-16")]
        assert bucket_todos_by_day(todos, 2023, 9) == {}
        assert bucket_todos_by_day(todos, 2022, 8) == {}

    def test_unreadable_days_are_skipped(self):
        todos = [todo(1, "2023-08-xx"), todo(2, "2023-08-"), todo(3, "2023-08-00"), todo(4, None), todo(5, "2023-08-05")]
        assert list(bucket_todos_by_day(todos, 2023, 8)) == [5]

    def test_todos_for_month_uses_padded_month(self):
        todos = [todo(1, "2023-01-05"), todo(2, "2023-10-05"), todo(3, "2023-11-05")]
        assert [t["id"] for t in todos_for_month(todos, 2023, 1)] == [1]


class TestMonthCursor:
    def test_previous_wraps_to_december(self):
        assert MonthCursor(year=2023, month=1).previous() == MonthCursor(year=2022, month=12)

    def test_next_wraps_to_january(self):
        assert MonthCursor(year=2023, month=12).next() == MonthCursor(year=2024, month=1)

    def test_plain_steps(self):
        cursor = MonthCursor(year=2023, month=6)
        assert cursor.next() == MonthCursor(year=2023, month=7)
        assert cursor.previous() == MonthCursor(year=2023, month=5)
        assert cursor.next().previous() == cursor

    def test_containing(self):
        assert MonthCursor.containing(SimpleDate(16, 8, 2023)) == MonthCursor(year=2023, month=8)


def test_is_today():
    today = SimpleDate(16, 8, 2023)
    assert is_today(16, 2023, 8, today)
    assert not is_today(16, 2023, 9, today)
    assert not is_today(15, 2023, 8, today)


def test_calendar_snippet():
    assert calendar_snippet("Sonogashira coupling") == "Sonogashira coupling"
    assert calendar_snippet("Waste Solvent Disposal") == "Waste Solvent Disp..."


class TestBuildMonthGrid:
    def test_grid_for_august(self):
        today = SimpleDate(16, 8, 2023)
        todos = [todo(1, "2023-08-16", name="Waste Solvent Disposal"), todo(2, "2023-09-01")]
        grid = build_month_grid(todos, MonthCursor(year=2023, month=8), today)

        assert grid.leading_blanks == 1
        assert grid.day_count == 31
        assert [cell.day for cell in grid.days] == list(range(1, 32))
        cell = grid.days[15]
        assert cell.day == 16
        assert cell.is_today
        assert [t["id"] for t in cell.todos] == [1]
        assert cell.todos[0]["snippet"] == "Waste Solvent Disp..."
        assert sum(1 for c in grid.days if c.is_today) == 1
        assert sum(len(c.todos) for c in grid.days) == 1

    def test_days_past_month_end_are_not_laid_out(self):
        grid = build_month_grid([todo(1, "2023-02-30")], MonthCursor(year=2023, month=2), SimpleDate(1, 1, 2023))
        assert len(grid.days) == 28
        assert all(not c.todos for c in grid.days)

    def test_inputs_are_not_mutated(self):
        todos = [todo(1, "2023-08-16")]
        build_month_grid(todos, MonthCursor(year=2023, month=8), SimpleDate(1, 8, 2023))
        assert "snippet" not in todos[0]
