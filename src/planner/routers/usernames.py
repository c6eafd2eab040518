from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..repositories import ListQuery, Repository, get_repository
from ..schemas import UsernameCreate, UsernameOut
from ..utils import pagination_envelope

router = APIRouter(
    prefix="/api/v1/usernames",
    tags=["usernames"],
)


class UsernamePage(BaseModel):
    items: List[UsernameOut] = Field(..., description="Registered usernames")
    total: int
    limit: int
    offset: int


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=UsernamePage,
    summary="List Usernames",
    description="List registered usernames in registration order.",
)
def list_usernames(
    limit: int = Query(100, ge=0, le=1000, description="Maximum number of items to return"),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
    repo: Repository = Depends(get_repository),
) -> UsernamePage:
    items, total = repo.list("usernames", ListQuery(limit=limit, offset=offset))
    envelope = pagination_envelope(
        items=[UsernameOut(**it) for it in items],
        total=total,
        limit=limit,
        offset=offset,
    )
    return UsernamePage(**envelope)


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=UsernameOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register Username",
    responses={
        201: {"description": "Username registered"},
        409: {"description": "Username already exists"},
    },
)
def create_username(payload: UsernameCreate, repo: Repository = Depends(get_repository)) -> UsernameOut:
    """
    Register a new username. Names are unique.
    """
    if repo.list_all("usernames", username=payload.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
    created = repo.create("usernames", payload.model_dump())
    return UsernameOut(**created)
