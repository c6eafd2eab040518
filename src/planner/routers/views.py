"""
Per-user views over the store: the filtered list, the month calendar, the
stored view state and the demo-data reset.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.calendar_grid import MonthCursor, build_month_grid
from ..core.datemath import SimpleDate
from ..core.filtering import FilterSettings, filter_by_project, run_filter_pipeline
from ..core.indexing import find_todo
from ..models import UsernameEntity
from ..repositories import Repository, get_repository
from ..schemas import (
    DisplayTodoOut,
    MonthCursorOut,
    MonthGridOut,
    SeedResult,
    TodoOut,
    ViewStateIn,
    ViewStateOut,
)
from ..seed import reset_user_data
from ..settings import Settings, get_settings
from ..utils import today_param
from ..view_state import filter_settings_of, load_view_state, reset_view_state, save_view_state

router = APIRouter(
    prefix="/api/v1/users/{username}",
    tags=["views"],
)


# PUBLIC_INTERFACE
@router.get(
    "/view-state",
    response_model=ViewStateOut,
    summary="Get View State",
    description="Stored filter settings and selected view; defaults when nothing is stored.",
)
def get_view_state(username: str, repo: Repository = Depends(get_repository)) -> ViewStateOut:
    return ViewStateOut(**load_view_state(repo, username))


# PUBLIC_INTERFACE
@router.put(
    "/view-state",
    response_model=ViewStateOut,
    summary="Replace View State",
)
def put_view_state(username: str, payload: ViewStateIn, repo: Repository = Depends(get_repository)) -> ViewStateOut:
    return ViewStateOut(**save_view_state(repo, username, payload.model_dump(mode="json")))


# PUBLIC_INTERFACE
@router.delete(
    "/view-state",
    response_model=ViewStateOut,
    summary="Reset View State",
    description="Back to all projects, all dates and the list view, as on logout.",
)
def delete_view_state(username: str, repo: Repository = Depends(get_repository)) -> ViewStateOut:
    return ViewStateOut(**reset_view_state(repo, username))


# PUBLIC_INTERFACE
@router.get(
    "/view",
    response_model=List[DisplayTodoOut],
    summary="List View",
    description=(
        "The user's todos filtered by project, then by date range, sorted by due date "
        "and annotated with dateFlag and prettyduedate.\n\n"
        "projectIndex and dateIndex override the stored view state for this request. "
        "An unknown dateIndex selects all dates."
    ),
)
def list_view(
    username: str,
    project_index: Optional[int] = Query(None, alias="projectIndex", ge=-1, description="-1 for all projects"),
    date_index: Optional[str] = Query(None, alias="dateIndex", description="all, week, day or past"),
    today: SimpleDate = Depends(today_param),
    repo: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> List[DisplayTodoOut]:
    stored = filter_settings_of(load_view_state(repo, username))
    filters = FilterSettings(
        project_index=stored.project_index if project_index is None else project_index,
        date_index=stored.date_index if date_index is None else date_index,
    )
    todos = repo.list_all("todos", username=username)
    display = run_filter_pipeline(todos, filters, today, settings.legacy_date_rollover)
    return [DisplayTodoOut(**t) for t in display]


# PUBLIC_INTERFACE
@router.get(
    "/todos/find",
    response_model=TodoOut,
    summary="Find Todo",
    description="Look a todo up by its projectIndex and todoIndex.",
    responses={404: {"description": "Todo not found"}},
)
def find_user_todo(
    username: str,
    project_index: int = Query(..., alias="projectIndex"),
    todo_index: int = Query(..., alias="todoIndex"),
    repo: Repository = Depends(get_repository),
) -> TodoOut:
    todo = find_todo(repo.list_all("todos", username=username), project_index, todo_index)
    if todo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return TodoOut(**todo)


# PUBLIC_INTERFACE
@router.get(
    "/calendar",
    response_model=MonthGridOut,
    summary="Calendar View",
    description=(
        "One month laid out on a Monday-first grid with the user's todos grouped by day. "
        "Only the project filter applies; year and month default to today's."
    ),
)
def calendar_view(
    username: str,
    year: Optional[int] = Query(None, description="Year to show"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month to show (1-12)"),
    project_index: Optional[int] = Query(None, alias="projectIndex", ge=-1, description="-1 for all projects"),
    today: SimpleDate = Depends(today_param),
    repo: Repository = Depends(get_repository),
) -> MonthGridOut:
    if project_index is None:
        project_index = load_view_state(repo, username)["project_index"]
    cursor = MonthCursor(
        year=today.year if year is None else year,
        month=today.month if month is None else month,
    )
    todos = filter_by_project(repo.list_all("todos", username=username), project_index)
    grid = build_month_grid(todos, cursor, today)
    return MonthGridOut.model_validate(asdict(grid))


# PUBLIC_INTERFACE
@router.get(
    "/calendar/navigate",
    response_model=MonthCursorOut,
    summary="Step Calendar Month",
    responses={400: {"description": "direction must be 'prev' or 'next'"}},
)
def navigate_calendar(
    username: str,
    year: int = Query(..., description="Current year"),
    month: int = Query(..., ge=1, le=12, description="Current month (1-12)"),
    direction: str = Query(..., description="'prev' or 'next'"),
) -> MonthCursorOut:
    """
    The month before or after year/month, wrapping over year boundaries.
    """
    cursor = MonthCursor(year=year, month=month)
    step = direction.strip().lower()
    if step == "prev":
        cursor = cursor.previous()
    elif step == "next":
        cursor = cursor.next()
    else:
        raise HTTPException(status_code=400, detail="direction must be 'prev' or 'next'")
    return MonthCursorOut(year=cursor.year, month=cursor.month)


# PUBLIC_INTERFACE
@router.post(
    "/seed",
    response_model=SeedResult,
    summary="Reset To Demo Data",
    description=(
        "Delete all projects and todos of the user and store the demo projects and todos, "
        "with due dates relative to today. Registers the username when it is new."
    ),
)
def seed_user(
    username: str,
    today: SimpleDate = Depends(today_param),
    repo: Repository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> SeedResult:
    if not repo.list_all("usernames", username=username):
        repo.create("usernames", UsernameEntity(username=username))
    projects, todos = reset_user_data(repo, username, today, settings.legacy_date_rollover)
    reset_view_state(repo, username)
    return SeedResult(username=username, projects=projects, todos=todos)
