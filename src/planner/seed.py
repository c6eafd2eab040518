"""Demo projects and todos a user can reset to."""
from __future__ import annotations

from typing import List, Tuple

from .core.datemath import SimpleDate, shift_date
from .logging import get_logger
from .models import ProjectEntity, TodoEntity
from .repositories import Repository

logger = get_logger(__name__)

DEFAULT_PROJECTS: List[Tuple[int, str]] = [
    (0, "Lab Duties"),
    (1, "Catalysis"),
]

# (project_index, todo_index, name, desc, notes, days from today)
DEFAULT_TODOS: List[Tuple[int, int, str, str, str, int]] = [
    (1, 0, "Mitsunobu reaction", "Book 7 page 12",
     "Didn't run under nitrogen last time and it was still fine. Repeat reaction to make more starting material", -1),
    (0, 0, "Waste Disposal", "By 10:00 at the latest", "Take down the TLC plates too", 0),
    (1, 1, "Wash glassware", "Do the syringe needles top",
     "Make sure to put in the oven in preparation for tomorrow's reaction", 1),
    (0, 1, "Waste Solvent Disposal", "10:00 at the lobby", "Make sure to bring back some empty carboys (if available)", 2),
    (1, 2, "BCl3/AlCl3 reaction", "Book 7 page 10", "Enough material for a 1g scale reaction", 14),
    (0, 2, "Liquid Nitrogen", "Take it from floor 3 when it arrives",
     "Asada has been doing freeze-pump-thaw cycles recently, so need to fill it to the brim", 0),
    (1, 3, "Sonogashira coupling", "Book 7 page 11", "Use the fresh alkyne when it arrives", 0),
    (0, 3, "Dry Ice", "Move it to the storage container",
     "Be sure to dispose of the plastic inside the container before filling it", 1),
    (1, 4, "Chemical delivery", "Materials for the next set of reactions", "May need to order more AlCl3 soon", 1),
    (0, 4, "Fume Hood Maintenance", "Scheduled maintenance", "Won't be able to use the fume hood on this day", 4),
]


def make_project_list(username: str) -> List[ProjectEntity]:
    return [
        {"username": username, "project_index": index, "project_name": name}
        for index, name in DEFAULT_PROJECTS
    ]


def make_todo_list(username: str, today: SimpleDate, legacy_rollover: bool = False) -> List[TodoEntity]:
    """Default todos with due dates relative to today."""
    return [
        {
            "username": username,
            "project_index": project_index,
            "todo_index": todo_index,
            "name": name,
            "desc": desc,
            "notes": notes,
            "duedate": shift_date(today, offset, legacy_rollover),
        }
        for project_index, todo_index, name, desc, notes, offset in DEFAULT_TODOS
    ]


# PUBLIC_INTERFACE
def reset_user_data(
    repo: Repository,
    username: str,
    today: SimpleDate,
    legacy_rollover: bool = False,
) -> Tuple[int, int]:
    """
    Delete every project and todo of a user, then store the default data.

    Returns:
        (number of projects, number of todos) created.
    """
    for collection in ("projects", "todos"):
        for record in repo.list_all(collection, username=username):
            repo.delete(collection, record["id"])

    projects = make_project_list(username)
    todos = make_todo_list(username, today, legacy_rollover)
    for project in projects:
        repo.create("projects", project)
    for todo in todos:
        repo.create("todos", todo)

    logger.info("Seeded %d projects and %d todos for %s", len(projects), len(todos), username)
    return len(projects), len(todos)
