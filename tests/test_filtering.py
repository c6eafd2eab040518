"""Tests for list-view filtering and annotation."""

import pytest

from planner.core.datemath import SimpleDate
from planner.core.filtering import (
    FilterSettings,
    annotate_for_display,
    filter_by_date,
    filter_by_project,
    run_filter_pipeline,
)


def make_todo(id, project_index, todo_index, duedate, name=None):
    return {
        "id": id,
        "username": "tester",
        "project_index": project_index,
        "todo_index": todo_index,
        "name": name or f"Todo {id}",
        "desc": "",
        "notes": "",
        "duedate": duedate,
    }


@pytest.fixture
def todos():
    return [
        make_todo(1, 0, 0, "2023-06-20"),
        make_todo(2, 1, 0, "2023-06-15"),
        make_todo(3, 0, 1, "2023-06-10"),
        make_todo(4, 1, 1, "2023-06-25"),
        make_todo(5, 0, 2, "2023-06-15"),
    ]


def ids(items):
    return [t["id"] for t in items]


class TestFilterByProject:
    def test_all_projects_returns_everything_in_order(self, todos):
        result = filter_by_project(todos, -1)
        assert result == todos
        assert result is not todos

    def test_all_projects_as_string(self, todos):
        assert filter_by_project(todos, "-1") == todos

    def test_single_project(self, todos):
        assert ids(filter_by_project(todos, 1)) == [2, 4]

    def test_string_and_int_selectors_match(self, todos):
        assert filter_by_project(todos, "0") == filter_by_project(todos, 0)

    def test_string_project_index_on_records(self):
        todos = [make_todo(1, "1", 0, "2023-06-15"), make_todo(2, 2, 0, "2023-06-15")]
        assert ids(filter_by_project(todos, 1)) == [1]

    def test_decimal_string_selector_matches(self, todos):
        assert ids(filter_by_project(todos, "1.0")) == [2, 4]

    def test_unknown_project_is_empty(self, todos):
        assert filter_by_project(todos, 7) == []


class TestFilterByDate:
    def test_week_includes_today_excludes_day_seven(self, todos, today):
        todos.append(make_todo(6, 0, 3, "2023-06-22"))
        todos.append(make_todo(7, 0, 4, "2023-06-21"))
        assert ids(filter_by_date(todos, "week", today)) == [1, 2, 5, 7]

    def test_day(self, todos, today):
        assert ids(filter_by_date(todos, "day", today)) == [2, 5]

    def test_past(self, todos, today):
        assert ids(filter_by_date(todos, "past", today)) == [3]

    def test_all(self, todos, today):
        assert filter_by_date(todos, "all", today) == todos

    def test_unknown_index_behaves_like_all(self, todos, today):
        assert filter_by_date(todos, "fortnight", today) == todos

    def test_empty_input(self, today):
        assert filter_by_date([], "week", today) == []

    def test_malformed_dates_never_match_a_range(self, today):
        todos = [make_todo(1, 0, 0, "soon"), make_todo(2, 0, 1, None), make_todo(3, 0, 2, "2023-06-14")]
        assert ids(filter_by_date(todos, "past", today)) == [3]
        assert filter_by_date(todos, "day", today) == []
        assert filter_by_date(todos, "week", today) == []
        assert ids(filter_by_date(todos, "all", today)) == [1, 2, 3]

    def test_week_across_month_end(self):
        end_of_june = SimpleDate(28, 6, 2023)
        todos = [
            make_todo(1, 0, 0, "2023-07-04"),
            make_todo(2, 0, 1, "2023-07-05"),
            make_todo(3, 0, 2, "2023-06-30"),
        ]
        assert ids(filter_by_date(todos, "week", end_of_june)) == [1, 3]


class TestAnnotateForDisplay:
    def test_sorted_by_due_date_stable(self, todos, today):
        result = annotate_for_display(todos, today)
        assert ids(result) == [3, 2, 5, 1, 4]

    def test_flags_and_pretty_dates(self, todos, today):
        todos.append(make_todo(6, 0, 3, "2023-06-16"))
        todos.append(make_todo(7, 0, 4, "2023-06-17"))
        result = {t["id"]: t for t in annotate_for_display(todos, today)}
        assert result[3]["date_flag"] == "Past"
        assert result[2]["date_flag"] == "Today"
        assert result[6]["date_flag"] == "Tomorrow"
        assert result[7]["date_flag"] == "DayAfterTomorrow"
        assert result[1]["date_flag"] is None
        assert result[2]["prettyduedate"] == "15 Jun\u00a0\u00a0'23"

    def test_inputs_are_not_mutated(self, todos, today):
        annotate_for_display(todos, today)
        assert all("date_flag" not in t and "prettyduedate" not in t for t in todos)

    def test_idempotent(self, todos, today):
        once = annotate_for_display(todos, today)
        twice = annotate_for_display(once, today)
        assert twice == once

    def test_malformed_dates_do_not_break_the_pass(self, today):
        todos = [make_todo(1, 0, 0, "soon"), make_todo(2, 0, 1, None), make_todo(3, 0, 2, "2023-06-15")]
        result = annotate_for_display(todos, today)
        assert ids(result) == [2, 3, 1]
        by_id = {t["id"]: t for t in result}
        assert by_id[1]["date_flag"] is None
        assert by_id[1]["prettyduedate"] == "soon"
        assert by_id[2]["date_flag"] is None
        assert by_id[3]["date_flag"] == "Today"


class TestRunFilterPipeline:
    def test_default_settings_show_everything_sorted(self, todos, today):
        result = run_filter_pipeline(todos, FilterSettings(), today)
        assert ids(result) == [3, 2, 5, 1, 4]

    def test_project_then_date(self, todos, today):
        result = run_filter_pipeline(todos, FilterSettings(project_index=0, date_index="week"), today)
        assert ids(result) == [5, 1]
        assert [t["date_flag"] for t in result] == ["Today", None]

    def test_matches_manual_composition(self, todos, today):
        settings = FilterSettings(project_index=1, date_index="day")
        manual = annotate_for_display(filter_by_date(filter_by_project(todos, 1), "day", today), today)
        assert run_filter_pipeline(todos, settings, today) == manual

    def test_no_matches_is_empty(self, todos, today):
        assert run_filter_pipeline(todos, FilterSettings(project_index=1, date_index="past"), today) == []
