from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..core.filtering import loose_equals
from ..core.indexing import new_todo_index
from ..repositories import ListQuery, Repository, get_repository
from ..schemas import TodoCreate, TodoOut
from ..utils import pagination_envelope

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


class TodoPage(BaseModel):
    """
    Envelope for paginated list responses.
    """
    items: List[TodoOut] = Field(..., description="List of Todo items")
    total: int = Field(..., description="Total number of items matching the query")
    limit: int = Field(..., description="Limit applied to the query")
    offset: int = Field(..., description="Offset applied to the query")


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description=(
        "Create a new Todo item. When todoIndex is omitted it is one past the largest "
        "todoIndex of the project, or 0 when the project has no todos."
    ),
    responses={
        201: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(get_repository)) -> TodoOut:
    data = payload.model_dump()
    if data["todo_index"] is None:
        data["todo_index"] = new_todo_index(repo.list_all("todos", username=payload.username), payload.project_index)
    created = repo.create("todos", data)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoPage,
    summary="List Todos",
    description=(
        "List todos in creation order.\n\n"
        "Query parameters:\n"
        "- username: only todos of this user\n"
        "- projectIndex: only todos of this project\n"
        "- limit: max number of items to return (0..1000)\n"
        "- offset: number of items to skip (>=0)"
    ),
)
def list_todos(
    username: Optional[str] = Query(None, description="Only todos of this user"),
    project_index: Optional[int] = Query(None, alias="projectIndex", description="Only todos of this project"),
    limit: int = Query(100, ge=0, le=1000, description="Maximum number of items to return"),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
    repo: Repository = Depends(get_repository),
) -> TodoPage:
    query = ListQuery(limit=limit, offset=offset, username=username, project_index=project_index)
    items, total = repo.list("todos", query)
    envelope = pagination_envelope(
        items=[TodoOut(**it) for it in items],
        total=total,
        limit=limit,
        offset=offset,
    )
    return TodoPage(**envelope)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by its store id.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, repo: Repository = Depends(get_repository)) -> TodoOut:
    item = repo.get("todos", todo_id)
    if not item:
        raise _not_found()
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description=(
        "Replace an existing Todo item. An omitted todoIndex keeps the current one, "
        "or takes the next free index when the todo moves to another project."
    ),
    responses={
        200: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
    },
)
def put_todo(todo_id: int, payload: TodoCreate, repo: Repository = Depends(get_repository)) -> TodoOut:
    existing = repo.get("todos", todo_id)
    if not existing:
        raise _not_found()
    data = payload.model_dump()
    if data["todo_index"] is None:
        if loose_equals(existing["project_index"], payload.project_index):
            data["todo_index"] = existing["todo_index"]
        else:
            # moved to another project: take the next free index there
            others = [t for t in repo.list_all("todos", username=payload.username) if t["id"] != todo_id]
            data["todo_index"] = new_todo_index(others, payload.project_index)
    updated = repo.replace("todos", todo_id, data)
    if not updated:
        raise _not_found()
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by its store id.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, repo: Repository = Depends(get_repository)) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    if not repo.delete("todos", todo_id):
        raise _not_found()
    return None
