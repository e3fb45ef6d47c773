from __future__ import annotations

import asyncio
from dataclasses import dataclass

from src.taskbeat.domain.exceptions import QueueUnavailableError
from src.taskbeat.domain.models import Task

_CLOSED = object()


@dataclass
class QueuedTask:
    """A task handed to the worker, plus the outcome of its request-path write."""

    task: Task
    committed: asyncio.Future[bool]

    def commit(self, succeeded: bool) -> None:
        if not self.committed.done():
            self.committed.set_result(succeeded)


class TaskQueue:
    """Bounded FIFO between many request handlers and the single worker."""

    def __init__(self, capacity: int = 100, enqueue_timeout: float = 5.0) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=capacity)
        self._enqueue_timeout = enqueue_timeout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize()

    async def put(self, task: Task) -> QueuedTask:
        """Enqueue ``task``, waiting up to the enqueue timeout for free capacity."""
        if self._closed:
            raise QueueUnavailableError("task queue is closed")
        item = QueuedTask(task=task, committed=asyncio.get_running_loop().create_future())
        try:
            await asyncio.wait_for(self._queue.put(item), timeout=self._enqueue_timeout)
        except asyncio.TimeoutError as exc:
            raise QueueUnavailableError("task queue is full") from exc
        return item

    async def get(self) -> QueuedTask | None:
        """Return the next queued task, or ``None`` once the queue is closed and drained."""
        item = await self._queue.get()
        if item is _CLOSED:
            return None
        return item  # type: ignore[return-value]

    async def close(self) -> None:
        """Refuse new tasks; the worker stops after draining what is already queued."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSED)
