from __future__ import annotations

import os
import threading
from datetime import datetime, timezone

from src.taskbeat.domain.exceptions import AuditError
from src.taskbeat.domain.models import Task

# Shared by every recorder in the process so appends to one file never interleave.
_APPEND_LOCK = threading.Lock()


def format_entry(task: Task, source_tag: str, now: datetime | None = None) -> str:
    ts = (now or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    phi = "true" if task.contains_phi else "false"
    # Control characters are escaped so an id can never split or forge a line.
    task_id = task.id.encode("unicode_escape").decode("ascii")
    return f"{ts} = {source_tag} Queue TaskID={task_id} PHI={phi}\n"


class FileAuditRecorder:
    """Appends one line per processed task to a text file; never rewrites it."""

    def __init__(self, path: str, source_tag: str = "TaskBeat") -> None:
        self._path = path
        self._source_tag = source_tag

    @property
    def path(self) -> str:
        return self._path

    def record(self, task: Task) -> None:
        # The worker can receive tasks that never went through request validation.
        if not task.id:
            raise AuditError("missing id")
        entry = format_entry(task, self._source_tag)
        with _APPEND_LOCK:
            try:
                with open(self._path, "a", encoding="utf-8") as handle:
                    handle.write(entry)
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError as exc:
                raise AuditError(f"cannot append to {self._path}: {exc}") from exc
