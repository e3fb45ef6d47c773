from src.taskbeat.domain.models.fields import ALLOWED_FIELDS, MASK_TOKEN, SENSITIVE_FIELDS
from src.taskbeat.domain.models.task import Task

__all__ = [
    "Task",
    "ALLOWED_FIELDS",
    "SENSITIVE_FIELDS",
    "MASK_TOKEN",
]
