"""SQLite document store for per-user entity records.

Each record is a JSON document addressed by ``(kind, id)``. ``create`` returns a
generated id, ``update`` merges fields into the stored document. Records that
must exist at most once per user (achievements, challenge enrolments) go
through ``create_unique``, which relies on a UNIQUE index rather than a
check-then-insert sequence.
"""

import json
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import structlog

from db import wal_connect

logger = structlog.get_logger()


class EntityStoreError(Exception):
    """Raised when a record cannot be read back or merged."""


class EntityStore:
    """SQLite persistence for all entity kinds."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    def _init_tables(self):
        with wal_connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS entities (
                    id TEXT PRIMARY KEY,
                    kind TEXT NOT NULL,
                    user_id TEXT,
                    unique_key TEXT,
                    data TEXT NOT NULL DEFAULT '{}',
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_entities_kind ON entities(kind, user_id)")
            conn.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_entities_unique
                ON entities(kind, user_id, unique_key)
                WHERE unique_key IS NOT NULL
            """)

    def create(self, kind: str, data: dict, user_id: Optional[str] = None) -> str:
        """Insert a record, return its generated id."""
        entity_id = uuid.uuid4().hex[:12]
        now = datetime.now().isoformat()
        with wal_connect(self.db_path) as conn:
            conn.execute(
                """INSERT INTO entities (id, kind, user_id, unique_key, data, created_at, updated_at)
                VALUES (?, ?, ?, NULL, ?, ?, ?)""",
                (entity_id, str(kind), user_id, json.dumps(data), now, now),
            )
        logger.debug("entity_created", kind=str(kind), entity_id=entity_id)
        return entity_id

    def create_unique(
        self, kind: str, unique_key: str, data: dict, user_id: Optional[str] = None
    ) -> tuple[str, bool]:
        """Insert unless ``(kind, user_id, unique_key)`` exists.

        Returns (id, created). When the record already exists, the existing id is
        returned and ``created`` is False.
        """
        entity_id = uuid.uuid4().hex[:12]
        now = datetime.now().isoformat()
        with wal_connect(self.db_path) as conn:
            cur = conn.execute(
                """INSERT OR IGNORE INTO entities
                (id, kind, user_id, unique_key, data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (entity_id, str(kind), user_id, unique_key, json.dumps(data), now, now),
            )
            if cur.rowcount == 1:
                return entity_id, True
            row = conn.execute(
                "SELECT id FROM entities WHERE kind = ? AND user_id IS ? AND unique_key = ?",
                (str(kind), user_id, unique_key),
            ).fetchone()
        if row is None:
            raise EntityStoreError(f"{kind} {unique_key} neither inserted nor found")
        logger.debug("entity_exists", kind=str(kind), unique_key=unique_key)
        return row[0], False

    def get(self, kind: str, entity_id: str) -> Optional[dict]:
        with wal_connect(self.db_path, row_factory=True) as conn:
            row = conn.execute(
                "SELECT * FROM entities WHERE kind = ? AND id = ?", (str(kind), entity_id)
            ).fetchone()
        return self._row_to_dict(row) if row else None

    def update(self, kind: str, entity_id: str, fields: dict) -> bool:
        """Merge ``fields`` into the stored document. Returns False if missing."""
        with wal_connect(self.db_path, row_factory=True) as conn:
            row = conn.execute(
                "SELECT data FROM entities WHERE kind = ? AND id = ?", (str(kind), entity_id)
            ).fetchone()
            if row is None:
                return False
            try:
                data = json.loads(row["data"])
            except json.JSONDecodeError as e:
                raise EntityStoreError(f"Corrupt {kind} record {entity_id}: {e}") from e
            data.update(fields)
            conn.execute(
                "UPDATE entities SET data = ?, updated_at = ? WHERE id = ?",
                (json.dumps(data), datetime.now().isoformat(), entity_id),
            )
        return True

    def delete(self, kind: str, entity_id: str) -> bool:
        with wal_connect(self.db_path) as conn:
            cur = conn.execute(
                "DELETE FROM entities WHERE kind = ? AND id = ?", (str(kind), entity_id)
            )
            return cur.rowcount > 0

    def filter(
        self,
        kind: str,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
        **match: Any,
    ) -> list[dict]:
        """List records of a kind, oldest first.

        ``match`` compares top-level document fields for equality.
        """
        query = "SELECT * FROM entities WHERE kind = ?"
        params: list = [str(kind)]
        if user_id is not None:
            query += " AND user_id = ?"
            params.append(user_id)
        query += " ORDER BY created_at ASC, rowid ASC"
        with wal_connect(self.db_path, row_factory=True) as conn:
            rows = conn.execute(query, params).fetchall()

        results = []
        for row in rows:
            record = self._row_to_dict(row)
            if all(record.get(k) == v for k, v in match.items()):
                results.append(record)
        if limit is not None:
            results = results[:limit]
        return results

    def first(self, kind: str, user_id: Optional[str] = None, **match: Any) -> Optional[dict]:
        rows = self.filter(kind, user_id=user_id, limit=1, **match)
        return rows[0] if rows else None

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        record = json.loads(row["data"])
        record["id"] = row["id"]
        record["user_id"] = row["user_id"]
        record["created_at"] = row["created_at"]
        record["updated_at"] = row["updated_at"]
        return record
