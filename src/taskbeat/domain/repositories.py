from __future__ import annotations

from typing import Protocol

from src.taskbeat.domain.models.task import Task


class TaskStore(Protocol):
    """Durable key-value persistence of tasks keyed by task id."""

    def put(self, task: Task) -> None:
        """Store ``task`` under its id, replacing any previous value."""

    def get(self, task_id: str) -> Task | None:
        """Return the task stored under ``task_id``, if any."""

    def keys(self) -> list[str]:
        """Return every stored task id."""


class AuditRecorder(Protocol):
    """Append-only sink receiving one entry per processed task."""

    def record(self, task: Task) -> None:
        """Append an audit entry for ``task``."""
