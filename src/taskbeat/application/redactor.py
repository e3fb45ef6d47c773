import logging
from collections.abc import Iterable

from src.taskbeat.domain.models import MASK_TOKEN, SENSITIVE_FIELDS, Task

logger = logging.getLogger(__name__)


def redact(task: Task, sensitive_fields: Iterable[str] = SENSITIVE_FIELDS) -> Task:
    """
    Return a copy of ``task`` with string-valued sensitive fields replaced by the mask token.

    Tasks without the PHI flag are returned unchanged. Non-string values under a
    sensitive key are kept as-is, and values already masked are not masked again,
    so applying this twice gives the same result as applying it once.
    """
    if not task.contains_phi:
        return task

    payload = dict(task.payload)
    for key in sensitive_fields:
        value = payload.get(key)
        if not isinstance(value, str) or value == MASK_TOKEN:
            continue
        payload[key] = MASK_TOKEN
        logger.info("Concealed PHI field", extra={"field": key, "task_id": task.id})
    return task.model_copy(update={"payload": payload})
