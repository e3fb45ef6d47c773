from src.taskbeat.domain.exceptions import InvalidTask
from src.taskbeat.domain.models import ALLOWED_FIELDS, Task


def validate(task: Task, allowed_fields: frozenset[str] = ALLOWED_FIELDS) -> None:
    """Raise ``InvalidTask`` unless ``task`` has an id and a non-empty, allow-listed payload."""
    if not task.id:
        raise InvalidTask(InvalidTask.MISSING_ID)
    if not task.payload:
        raise InvalidTask(InvalidTask.EMPTY_PAYLOAD)
    for key in task.payload:
        if key not in allowed_fields:
            raise InvalidTask(InvalidTask.DISALLOWED_KEY, key=key)
