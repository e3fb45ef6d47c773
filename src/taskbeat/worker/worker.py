from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import cast

import inject

from src.taskbeat.application.queue import QueuedTask, TaskQueue
from src.taskbeat.application.redactor import redact
from src.taskbeat.domain.exceptions import AuditError, StoreError
from src.taskbeat.domain.repositories import AuditRecorder, TaskStore

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"


class TaskWorker:
    """Single consumer of the task queue: redact, audit, then store each task in order."""

    def __init__(
        self,
        queue: TaskQueue | None = None,
        store: TaskStore | None = None,
        audit: AuditRecorder | None = None,
    ) -> None:
        self._queue = queue or cast(TaskQueue, inject.instance(TaskQueue))
        self._store = store or cast(TaskStore, inject.instance(TaskStore))
        self._audit = audit or cast(AuditRecorder, inject.instance(AuditRecorder))
        self._state = WorkerState.IDLE
        self._runner: asyncio.Task[None] | None = None
        self.processed = 0

    @property
    def state(self) -> WorkerState:
        return self._state

    def start(self) -> asyncio.Task[None]:
        if self._runner is None or self._runner.done():
            self._runner = asyncio.create_task(self.run(), name="taskbeat-worker")
        return self._runner

    async def stop(self) -> None:
        """Close the queue and wait until everything already queued is processed."""
        await self._queue.close()
        if self._runner is not None:
            await self._runner

    async def run(self) -> None:
        while True:
            item = await self._queue.get()
            if item is None:
                break
            self._state = WorkerState.PROCESSING
            try:
                await self.process(item)
            except Exception:
                logger.exception("Unexpected error processing task", extra={"task_id": item.task.id})
            finally:
                self._state = WorkerState.IDLE
        logger.info("Worker stopped", extra={"processed": self.processed})

    async def process(self, item: QueuedTask) -> None:
        if not await item.committed:
            logger.warning(
                "Dropping task whose intake write failed", extra={"task_id": item.task.id}
            )
            return

        task = redact(item.task)
        try:
            await asyncio.to_thread(self._audit.record, task)
        except AuditError as exc:
            logger.warning("Failed audit log", extra={"task_id": task.id, "error": str(exc)})

        try:
            await asyncio.to_thread(self._store.put, task)
        except StoreError:
            logger.exception("Failed to store task", extra={"task_id": task.id})
            return
        self.processed += 1
