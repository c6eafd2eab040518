from __future__ import annotations

import json
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Tuple

from .logging import get_logger
from .models import COLLECTIONS, Collection
from .repositories import ListQuery, Repository

logger = get_logger(__name__)


def _row_to_record(row: sqlite3.Row) -> Dict[str, Any]:
    return {"id": int(row["id"]), **json.loads(row["payload"])}


def _payload(data: Dict[str, Any]) -> Tuple[Optional[str], Optional[int], str]:
    body = {k: v for k, v in data.items() if k != "id"}
    project_index = body.get("project_index")
    return body.get("username"), int(project_index) if project_index is not None else None, json.dumps(body)


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    One table per collection. Records are stored as JSON payloads; username and
    project_index are copied into columns so they can be filtered on.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            for table in COLLECTIONS:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        username TEXT NULL,
                        project_index INTEGER NULL,
                        payload TEXT NOT NULL
                    )
                    """
                )
                conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{table}_username ON {table}(username)")

    @staticmethod
    def _table(collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        return collection

    def create(self, collection: Collection, data: Dict[str, Any]) -> Dict[str, Any]:
        table = self._table(collection)
        with self._conn() as conn:
            cur = conn.execute(
                f"INSERT INTO {table} (username, project_index, payload) VALUES (?, ?, ?)",
                _payload(data),
            )
            new_id = cur.lastrowid
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (new_id,)).fetchone()
            assert row is not None
        logger.info("Created %s record %s", collection, new_id)
        return _row_to_record(row)

    def get(self, collection: Collection, record_id: int) -> Optional[Dict[str, Any]]:
        table = self._table(collection)
        with self._conn() as conn:
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
            return _row_to_record(row) if row else None

    def replace(self, collection: Collection, record_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        table = self._table(collection)
        with self._conn() as conn:
            cur = conn.execute(
                f"UPDATE {table} SET username = ?, project_index = ?, payload = ? WHERE id = ?",
                (*_payload(data), record_id),
            )
            if cur.rowcount == 0:
                return None
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
            assert row is not None
        logger.info("Replaced %s record %s", collection, record_id)
        return _row_to_record(row)

    def delete(self, collection: Collection, record_id: int) -> bool:
        table = self._table(collection)
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            deleted = cur.rowcount > 0
        if deleted:
            logger.info("Deleted %s record %s", collection, record_id)
        return deleted

    def list(self, collection: Collection, query: Optional[ListQuery] = None) -> Tuple[List[Dict[str, Any]], int]:
        table = self._table(collection)
        q = query or ListQuery()
        clauses = []
        params: list = []

        if q.username is not None:
            clauses.append("username = ?")
            params.append(q.username)
        if q.project_index is not None:
            clauses.append("project_index = ?")
            params.append(q.project_index)

        where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self._conn() as conn:
            count_row = conn.execute(f"SELECT COUNT(*) as cnt FROM {table} {where_sql}", params).fetchone()
            total = int(count_row["cnt"]) if count_row else 0

            rows = conn.execute(
                f"""
                SELECT * FROM {table}
                {where_sql}
                ORDER BY id ASC
                LIMIT ? OFFSET ?
                """,
                [*params, max(q.limit, 0), max(q.offset, 0)],
            ).fetchall()
            logger.debug("Listed %d of %d %s records", len(rows), total, collection)
            return [_row_to_record(r) for r in rows], total
