from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Iterator
from contextlib import closing, contextmanager

from pydantic import ValidationError

from src.taskbeat.domain.exceptions import StoreError
from src.taskbeat.domain.models import Task

logger = logging.getLogger(__name__)

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqliteTaskStore:
    """Task store backed by a single SQLite key/value table."""

    def __init__(self, db_path: str, table: str = "Tasks") -> None:
        if not _TABLE_NAME.match(table):
            raise ValueError(f"Invalid table name: {table!r}")
        self._db_path = db_path
        self._table = table
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, timeout=5)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=FULL;")
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            with closing(self._connect()) as conn, conn:
                yield conn
        except sqlite3.Error as exc:
            raise StoreError(f"task store at {self._db_path} failed: {exc}") from exc

    def init_db(self) -> None:
        with self._transaction() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS "{self._table}" (
                    task_id TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def put(self, task: Task) -> None:
        with self._transaction() as conn:
            conn.execute(
                f"""
                INSERT INTO "{self._table}" (task_id, value) VALUES (?, ?)
                ON CONFLICT(task_id) DO UPDATE SET value = excluded.value
                """,
                (task.id, task.to_json()),
            )
        logger.debug("Stored task", extra={"task_id": task.id})

    def get(self, task_id: str) -> Task | None:
        with self._transaction() as conn:
            row = conn.execute(
                f'SELECT value FROM "{self._table}" WHERE task_id = ?',
                (task_id,),
            ).fetchone()
        if row is None:
            return None
        try:
            return Task.model_validate_json(row["value"])
        except ValidationError as exc:
            raise StoreError(f"stored task {task_id!r} is corrupt") from exc

    def keys(self) -> list[str]:
        with self._transaction() as conn:
            rows = conn.execute(f'SELECT task_id FROM "{self._table}" ORDER BY task_id').fetchall()
        return [row["task_id"] for row in rows]
