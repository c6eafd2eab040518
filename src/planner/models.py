from __future__ import annotations

from typing import Literal, TypedDict

Collection = Literal["usernames", "projects", "todos", "view_states"]

COLLECTIONS: tuple[Collection, ...] = ("usernames", "projects", "todos", "view_states")


class _Stored(TypedDict, total=False):
    # assigned by the repository on create
    id: int


# PUBLIC_INTERFACE
class UsernameEntity(_Stored):
    username: str


# PUBLIC_INTERFACE
class ProjectEntity(_Stored):
    """
    A named grouping of todos, scoped to a user.

    project_index is the user-facing identity; id is assigned by the store.
    """

    username: str
    project_index: int
    project_name: str


# PUBLIC_INTERFACE
class TodoEntity(_Stored):
    """
    A dated task record scoped to a project and a user.

    Fields:
    - id: store-assigned identifier
    - username: owning user
    - project_index / todo_index: composite identity within the user's scope
    - name, desc, notes: free text
    - duedate: 'YYYY-MM-DD' string, kept verbatim
    """

    username: str
    project_index: int
    todo_index: int
    name: str
    desc: str
    notes: str
    duedate: str


# PUBLIC_INTERFACE
class ViewStateEntity(_Stored):
    """Stored filter settings and selected view of one user."""

    username: str
    project_index: int
    date_index: str
    selected_view: str
