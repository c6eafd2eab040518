from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .core.datemath import DateFlag
from .core.filtering import DateIndex

DueDateInput = Union[date, str]


def _parse_duedate(value: Optional[DueDateInput]) -> str:
    """
    Normalize duedate input into a 'YYYY-MM-DD' string.
    - A date is formatted with isoformat().
    - A string must be an ISO calendar date; datetimes are not accepted.
    """
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, str):
        s = value.strip()
        try:
            return date.fromisoformat(s).isoformat()
        except ValueError as e:
            raise ValueError("Invalid duedate format. Use an ISO date string such as '2023-08-16'.") from e

    raise ValueError("Invalid type for duedate; expected date or ISO date string.")


def _clean_text(v: str, field_name: str) -> str:
    s = v.strip()
    if not (1 <= len(s) <= 200):
        raise ValueError(f"{field_name} length must be between 1 and 200 characters")
    return s


class WireModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class UsernameCreate(WireModel):
    username: str = Field(..., description="Login name", min_length=1, max_length=100)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("username must not be blank")
        return s


# PUBLIC_INTERFACE
class UsernameOut(WireModel):
    id: int = Field(..., description="Store identifier")
    username: str = Field(..., description="Login name")


# PUBLIC_INTERFACE
class ProjectCreate(WireModel):
    """
    Schema for creating or replacing a project.

    project_index is assigned by the server when omitted.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "Default", "projectName": "Catalysis"}},
    )

    username: str = Field(..., description="Owning user", min_length=1)
    project_name: str = Field(..., description="Display name of the project", min_length=1, max_length=200)
    project_index: Optional[int] = Field(default=None, ge=0, description="User-facing project number")

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        return _clean_text(v, "projectName")


# PUBLIC_INTERFACE
class ProjectOut(WireModel):
    id: int = Field(..., description="Store identifier")
    username: str
    project_index: int
    project_name: str


# PUBLIC_INTERFACE
class TodoCreate(WireModel):
    """
    Schema for creating or replacing a todo.

    todo_index is assigned by the server when omitted.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "Default",
                "projectIndex": 0,
                "name": "Waste Disposal",
                "desc": "By 10:00 at the latest",
                "notes": "Take down the TLC plates too",
                "duedate": "2023-04-16",
            }
        },
    )

    username: str = Field(..., description="Owning user", min_length=1)
    project_index: int = Field(..., ge=0, description="Project the todo belongs to")
    todo_index: Optional[int] = Field(default=None, ge=0, description="Per-project todo number")
    name: str = Field(..., description="Short title", min_length=1, max_length=200)
    desc: str = Field(default="", description="One-line description")
    notes: str = Field(default="", description="Free-form notes")
    duedate: str = Field(..., description="Due date as 'YYYY-MM-DD'")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_text(v, "name")

    @field_validator("duedate", mode="before")
    @classmethod
    def parse_duedate(cls, v: Optional[DueDateInput]) -> str:
        return _parse_duedate(v)


# PUBLIC_INTERFACE
class TodoOut(WireModel):
    id: int = Field(..., description="Store identifier")
    username: str
    project_index: int
    todo_index: int
    name: str
    desc: str = ""
    notes: str = ""
    duedate: str


# PUBLIC_INTERFACE
class DisplayTodoOut(TodoOut):
    """A todo as shown in the list view."""

    date_flag: Optional[DateFlag] = Field(default=None, description="Today, Tomorrow, DayAfterTomorrow or Past")
    prettyduedate: str = Field(..., description="Due date formatted for display, e.g. \"16 Aug  '23\"")


# PUBLIC_INTERFACE
class ViewStateIn(WireModel):
    project_index: int = Field(default=-1, ge=-1, description="-1 selects all projects")
    date_index: DateIndex = Field(default=DateIndex.ALL)
    selected_view: Literal["list", "calendar"] = Field(default="list")


# PUBLIC_INTERFACE
class ViewStateOut(ViewStateIn):
    username: str


class CalendarTodoOut(TodoOut):
    snippet: str = Field(..., description="Shortened name for the calendar tile")


class DayCellOut(WireModel):
    day: int
    is_today: bool
    todos: List[CalendarTodoOut]


# PUBLIC_INTERFACE
class MonthGridOut(WireModel):
    year: int
    month: int
    leading_blanks: int = Field(..., description="Empty cells before day 1 on a Monday-first grid")
    day_count: int
    days: List[DayCellOut]


class MonthCursorOut(WireModel):
    year: int
    month: int


class SeedResult(WireModel):
    username: str
    projects: int
    todos: int
