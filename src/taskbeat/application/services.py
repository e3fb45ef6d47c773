from __future__ import annotations

import asyncio
import logging
from typing import cast

import inject

from src.taskbeat.application.queue import TaskQueue
from src.taskbeat.application.redactor import redact
from src.taskbeat.application.validator import validate
from src.taskbeat.domain.exceptions import StoreError
from src.taskbeat.domain.models import Task
from src.taskbeat.domain.repositories import TaskStore

logger = logging.getLogger(__name__)


class IntakeService:
    """Request-path orchestration: decode, validate, redact, enqueue, persist."""

    def __init__(self, store: TaskStore | None = None, queue: TaskQueue | None = None) -> None:
        self._store = store or cast(TaskStore, inject.instance(TaskStore))
        self._queue = queue or cast(TaskQueue, inject.instance(TaskQueue))

    async def submit(self, raw: str | bytes) -> Task:
        """Decode a request body and accept the task it describes."""
        return await self.accept(Task.from_json(raw))

    async def accept(self, task: Task) -> Task:
        """
        Validate and queue ``task``, persisting its redacted form before returning.

        Raises ``InvalidTask`` before anything is queued or stored,
        ``QueueUnavailableError`` when the queue stays full, and ``StoreError``
        when the provisional write fails. The worker only writes a task after
        this write succeeded, so its write is always the last one for the id.
        """
        validate(task)
        task = redact(task.with_default_created_at())

        item = await self._queue.put(task)
        committed = False
        try:
            await asyncio.to_thread(self._store.put, task)
            committed = True
        except StoreError:
            logger.exception("Failed to persist task", extra={"task_id": task.id})
            raise
        finally:
            item.commit(committed)

        logger.info("Task queued", extra={"task_id": task.id, "contains_phi": task.contains_phi})
        return task
