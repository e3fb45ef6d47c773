from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.taskbeat.domain.exceptions import DecodeError

# Naive UTC; timestamps are compared after removing their offset.
_ZERO_INSTANT = datetime(1, 1, 1)


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", description="Caller-supplied task identifier.")
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Field name to value mapping."
    )
    contains_phi: bool = Field(
        default=False,
        alias="containsPHI",
        description="Whether sensitive payload fields must be masked.",
    )
    created_at: datetime | None = Field(
        default=None, alias="createdAt", description="Intake timestamp."
    )

    @field_validator("payload", mode="before")
    @classmethod
    def _null_payload(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_json(cls, raw: str | bytes) -> Task:
        """Decode a request body, raising ``DecodeError`` for anything unusable."""
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(f"Invalid JSON: {exc.error_count()} error(s) in request body") from exc

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def has_zero_created_at(self) -> bool:
        # Some clients send the zero instant for "unset"; naive values are read as UTC.
        if self.created_at is None:
            return True
        offset = self.created_at.utcoffset() or timedelta(0)
        try:
            return self.created_at.replace(tzinfo=None) - offset == _ZERO_INSTANT
        except OverflowError:
            # Earlier than the zero instant itself.
            return False

    def with_default_created_at(self) -> Task:
        if not self.has_zero_created_at():
            return self
        return self.model_copy(update={"created_at": datetime.now(timezone.utc)})
