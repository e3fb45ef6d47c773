from __future__ import annotations

import pytest
from fastapi import FastAPI

from src.taskbeat.domain.exceptions import AuditError, StoreError
from src.taskbeat.domain.models.task import Task
from src.taskbeat.domain.repositories import AuditRecorder, TaskStore
from src.taskbeat.infrastructure.audit.recorder import FileAuditRecorder
from src.taskbeat.infrastructure.sqlite.store import SqliteTaskStore
from src.taskbeat.presentation.app import create_app


class StubTaskStore(TaskStore):
    """Simple in-memory TaskStore replacement for tests."""

    def __init__(self, fail_puts: bool = False) -> None:
        self.tasks: dict[str, Task] = {}
        self.put_calls: list[str] = []
        self.fail_puts = fail_puts

    def put(self, task: Task) -> None:
        self.put_calls.append(task.id)
        if self.fail_puts:
            raise StoreError("disk unavailable")
        self.tasks[task.id] = task

    def get(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def keys(self) -> list[str]:
        return sorted(self.tasks)


class StubAuditRecorder(AuditRecorder):
    def __init__(self, fail: bool = False) -> None:
        self.recorded: list[Task] = []
        self.fail = fail

    def record(self, task: Task) -> None:
        if self.fail:
            raise AuditError("audit sink unavailable")
        self.recorded.append(task)


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings independent of any local .env file."""
    monkeypatch.setenv("APP_NAME", "Test API")
    monkeypatch.setenv("APP_VERSION", "0.1.0")
    monkeypatch.setenv("QUEUE_CAPACITY", "10")
    monkeypatch.setenv("ENQUEUE_TIMEOUT_SEC", "1.0")


@pytest.fixture
def sqlite_store(tmp_path) -> SqliteTaskStore:
    return SqliteTaskStore(str(tmp_path / "test.db"))


@pytest.fixture
def audit_recorder(tmp_path) -> FileAuditRecorder:
    return FileAuditRecorder(str(tmp_path / "taskbeat_audit.log"))


@pytest.fixture
def api_app(
    env_settings: None, sqlite_store: SqliteTaskStore, audit_recorder: FileAuditRecorder
) -> tuple[FastAPI, SqliteTaskStore, FileAuditRecorder]:
    """Application wired to a temporary SQLite store and audit file."""
    app = create_app(store=sqlite_store, audit=audit_recorder)
    return app, sqlite_store, audit_recorder
