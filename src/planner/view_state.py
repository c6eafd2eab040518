"""Per-user view state: the stored filter settings and selected view."""
from __future__ import annotations

from typing import Any, Dict

from .core.filtering import ALL_PROJECTS, DateIndex, FilterSettings
from .logging import get_logger
from .models import ViewStateEntity
from .repositories import Repository

logger = get_logger(__name__)

DEFAULT_VIEW_STATE: Dict[str, Any] = {
    "project_index": ALL_PROJECTS,
    "date_index": DateIndex.ALL.value,
    "selected_view": "list",
}


def _stored(repo: Repository, username: str) -> ViewStateEntity | None:
    records = repo.list_all("view_states", username=username)
    return records[0] if records else None


# PUBLIC_INTERFACE
def load_view_state(repo: Repository, username: str) -> ViewStateEntity:
    """The user's view state, or the defaults when nothing is stored."""
    record = _stored(repo, username)
    if record is None:
        return {"username": username, **DEFAULT_VIEW_STATE}
    return record


# PUBLIC_INTERFACE
def save_view_state(repo: Repository, username: str, state: Dict[str, Any]) -> ViewStateEntity:
    data = {**DEFAULT_VIEW_STATE, **state, "username": username}
    data.pop("id", None)
    record = _stored(repo, username)
    if record is None:
        return repo.create("view_states", data)
    return repo.replace("view_states", record["id"], data) or data


# PUBLIC_INTERFACE
def reset_view_state(repo: Repository, username: str) -> ViewStateEntity:
    """Back to all projects, all dates, list view (used on logout)."""
    logger.info("Resetting view state for %s", username)
    return save_view_state(repo, username, dict(DEFAULT_VIEW_STATE))


def filter_settings_of(state: Dict[str, Any]) -> FilterSettings:
    return FilterSettings(project_index=state["project_index"], date_index=state["date_index"])
