from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..core.filtering import ALL_PROJECTS, loose_equals
from ..core.indexing import associated_todo_ids, new_project_index
from ..logging import get_logger
from ..repositories import ListQuery, Repository, get_repository
from ..schemas import ProjectCreate, ProjectOut
from ..utils import pagination_envelope
from ..view_state import load_view_state, save_view_state

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/v1/projects",
    tags=["projects"],
)


class ProjectPage(BaseModel):
    items: List[ProjectOut] = Field(..., description="List of projects")
    total: int = Field(..., description="Total number of projects matching the query")
    limit: int
    offset: int


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=ProjectPage,
    summary="List Projects",
    description="List projects in creation order, optionally for a single user.",
)
def list_projects(
    username: Optional[str] = Query(None, description="Only projects of this user"),
    limit: int = Query(100, ge=0, le=1000, description="Maximum number of items to return"),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
    repo: Repository = Depends(get_repository),
) -> ProjectPage:
    items, total = repo.list("projects", ListQuery(limit=limit, offset=offset, username=username))
    envelope = pagination_envelope(
        items=[ProjectOut(**it) for it in items],
        total=total,
        limit=limit,
        offset=offset,
    )
    return ProjectPage(**envelope)


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
    description=(
        "Create a project. When projectIndex is omitted it is one past the index of the "
        "user's most recently created project, or 0 for the first one."
    ),
)
def create_project(payload: ProjectCreate, repo: Repository = Depends(get_repository)) -> ProjectOut:
    data = payload.model_dump()
    if data["project_index"] is None:
        data["project_index"] = new_project_index(repo.list_all("projects", username=payload.username))
    created = repo.create("projects", data)
    return ProjectOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/{project_id}",
    response_model=ProjectOut,
    summary="Get Project",
    responses={404: {"description": "Project not found"}},
)
def get_project(project_id: int, repo: Repository = Depends(get_repository)) -> ProjectOut:
    item = repo.get("projects", project_id)
    if not item:
        raise _not_found()
    return ProjectOut(**item)


# PUBLIC_INTERFACE
@router.put(
    "/{project_id}",
    response_model=ProjectOut,
    summary="Replace Project",
    description="Replace a project. An omitted projectIndex keeps the current one.",
    responses={404: {"description": "Project not found"}},
)
def put_project(project_id: int, payload: ProjectCreate, repo: Repository = Depends(get_repository)) -> ProjectOut:
    existing = repo.get("projects", project_id)
    if not existing:
        raise _not_found()
    data = payload.model_dump()
    if data["project_index"] is None:
        data["project_index"] = existing["project_index"]
    updated = repo.replace("projects", project_id, data)
    if not updated:
        raise _not_found()
    return ProjectOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Project",
    description=(
        "Delete a project together with all of its todos. A stored project filter "
        "pointing at it falls back to all projects."
    ),
    responses={404: {"description": "Project not found"}},
)
def delete_project(project_id: int, repo: Repository = Depends(get_repository)) -> None:
    project = repo.get("projects", project_id)
    if not project:
        raise _not_found()

    username = project["username"]
    todo_ids = associated_todo_ids(repo.list_all("todos", username=username), project["project_index"])
    for todo_id in todo_ids:
        repo.delete("todos", todo_id)
    repo.delete("projects", project_id)
    logger.info("Deleted project %s of %s with %d todos", project_id, username, len(todo_ids))

    state = load_view_state(repo, username)
    if loose_equals(state["project_index"], project["project_index"]):
        save_view_state(repo, username, {**state, "project_index": ALL_PROJECTS})
    return None
