from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .logging import get_logger
from .models import COLLECTIONS, Collection
from .settings import get_settings

logger = get_logger(__name__)

UNLIMITED = 2**31 - 1


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing records of one collection.
    Records always come back in store order (ascending id).
    """
    limit: int = 1000
    offset: int = 0
    username: Optional[str] = None
    project_index: Optional[int] = None


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract contract for the record store.

    Each collection ('usernames', 'projects', 'todos', 'view_states') holds
    plain dict records keyed by a store-assigned integer id.
    """

    @abstractmethod
    def create(self, collection: Collection, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new record and return it with its assigned id."""

    @abstractmethod
    def get(self, collection: Collection, record_id: int) -> Optional[Dict[str, Any]]:
        """Return a record by id, or None if not found."""

    @abstractmethod
    def replace(self, collection: Collection, record_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace all fields of a record. Return the stored record or None if not found."""

    @abstractmethod
    def delete(self, collection: Collection, record_id: int) -> bool:
        """Delete a record by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self, collection: Collection, query: Optional[ListQuery] = None) -> Tuple[List[Dict[str, Any]], int]:
        """
        Return a slice of records and the total count matching filters.
        - Filter by username and project_index when given
        - Supports limit/offset
        """

    def list_all(self, collection: Collection, username: Optional[str] = None) -> List[Dict[str, Any]]:
        """Every record of a collection (optionally of one user), in store order."""
        items, _ = self.list(collection, ListQuery(limit=UNLIMITED, username=username))
        return items


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")


def _strip_id(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k != "id"}


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[str, Dict[int, Dict[str, Any]]] = {c: {} for c in COLLECTIONS}
        self._next_id: Dict[str, int] = {c: 1 for c in COLLECTIONS}

    def _allocate_id(self, collection: Collection) -> int:
        with self._lock:
            i = self._next_id[collection]
            self._next_id[collection] += 1
            return i

    def create(self, collection: Collection, data: Dict[str, Any]) -> Dict[str, Any]:
        _check_collection(collection)
        record = {"id": self._allocate_id(collection), **_strip_id(data)}
        with self._lock:
            self._items[collection][record["id"]] = record
        logger.info("Created %s record %s", collection, record["id"])
        return record.copy()

    def get(self, collection: Collection, record_id: int) -> Optional[Dict[str, Any]]:
        _check_collection(collection)
        with self._lock:
            item = self._items[collection].get(record_id)
            return None if item is None else item.copy()

    def replace(self, collection: Collection, record_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        _check_collection(collection)
        with self._lock:
            if record_id not in self._items[collection]:
                return None
            record = {"id": record_id, **_strip_id(data)}
            self._items[collection][record_id] = record
        logger.info("Replaced %s record %s", collection, record_id)
        return record.copy()

    def delete(self, collection: Collection, record_id: int) -> bool:
        _check_collection(collection)
        with self._lock:
            deleted = self._items[collection].pop(record_id, None) is not None
        if deleted:
            logger.info("Deleted %s record %s", collection, record_id)
        return deleted

    def list(self, collection: Collection, query: Optional[ListQuery] = None) -> Tuple[List[Dict[str, Any]], int]:
        _check_collection(collection)
        q = query or ListQuery()
        with self._lock:
            items: Iterable[Dict[str, Any]] = sorted(self._items[collection].values(), key=lambda r: r["id"])

            if q.username is not None:
                items = [r for r in items if r.get("username") == q.username]
            if q.project_index is not None:
                items = [r for r in items if r.get("project_index") == q.project_index]

            items = list(items)
            total = len(items)

            start = max(q.offset, 0)
            end = start + max(q.limit, 0)
            page = items[start:end]

            logger.debug("Listed %d of %d %s records", len(page), total, collection)
            # Return copies to avoid external mutation
            return [r.copy() for r in page], total


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Return the configured repository, created once per process.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using sqlite store at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory store")
    return InMemoryRepository()
