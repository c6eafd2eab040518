"""Composite-identity helpers for projects and todos."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .filtering import ProjectSelector, filter_by_project, loose_equals


def new_todo_index(todos: Iterable[Mapping[str, Any]], project_index: ProjectSelector) -> int:
    """
    Next todo_index for a project: one past the largest in use, or 0.

    Gaps left by deletions are kept.
    """
    indexes = [int(t["todo_index"]) for t in filter_by_project(todos, project_index)]
    if not indexes:
        return 0
    return max(indexes) + 1


def new_project_index(projects: Sequence[Mapping[str, Any]]) -> int:
    """One past the project_index of the last project in store order, or 0."""
    if not projects:
        return 0
    return int(projects[-1]["project_index"]) + 1


def find_todo(
    todos: Iterable[Mapping[str, Any]],
    project_index: ProjectSelector,
    todo_index: Any,
) -> Optional[Mapping[str, Any]]:
    for todo in todos:
        if loose_equals(todo.get("project_index"), project_index) and loose_equals(todo.get("todo_index"), todo_index):
            return todo
    return None


def associated_todo_ids(todos: Iterable[Mapping[str, Any]], project_index: ProjectSelector) -> List[int]:
    """Store ids of the todos that belong to a project."""
    return [t["id"] for t in todos if loose_equals(t.get("project_index"), project_index)]
