class DecodeError(ValueError):
    """Raised when a request body cannot be decoded into a task."""


class InvalidTask(ValueError):
    """Raised when a decoded task fails business validation."""

    MISSING_ID = "missing id"
    EMPTY_PAYLOAD = "empty payload"
    DISALLOWED_KEY = "disallowed key"

    def __init__(self, reason: str, key: str | None = None) -> None:
        self.reason = reason
        self.key = key
        super().__init__(self._message())

    def _message(self) -> str:
        if self.reason == self.MISSING_ID:
            return "task ID is missing"
        if self.reason == self.EMPTY_PAYLOAD:
            return "payload cannot be empty"
        if self.reason == self.DISALLOWED_KEY:
            return f"invalid key {self.key}"
        return self.reason


class StoreError(Exception):
    """Raised when the task store cannot complete a read or write."""


class AuditError(Exception):
    """Raised when an audit entry cannot be recorded."""


class QueueUnavailableError(Exception):
    """Raised when the work queue is closed or stays full past the enqueue timeout."""
