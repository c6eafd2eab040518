import os

import pytest

# Ensure we default to memory backend for tests to avoid filesystem dependencies
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from planner.core.datemath import SimpleDate  # noqa: E402
from planner.main import app  # noqa: E402
from planner.repositories import InMemoryRepository, get_repository  # noqa: E402


@pytest.fixture
def repo():
    """A fresh in-memory store wired into the app for one test."""
    store = InMemoryRepository()
    app.dependency_overrides[get_repository] = lambda: store
    yield store
    app.dependency_overrides.pop(get_repository, None)


@pytest.fixture
def today():
    return SimpleDate(day=15, month=6, year=2023)
