from __future__ import annotations

from typing import cast

import inject
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from src.taskbeat.application.services import IntakeService
from src.taskbeat.domain.exceptions import (
    DecodeError,
    InvalidTask,
    QueueUnavailableError,
    StoreError,
)

router = APIRouter(tags=["tasks"])


class QueueResponse(BaseModel):
    status: str = Field(default="task queued", description="Intake outcome.")


def get_intake_service() -> IntakeService:
    return cast(IntakeService, inject.instance(IntakeService))


@router.post(
    "/queue",
    status_code=202,
    response_model=QueueResponse,
    summary="Queue a task",
    description=(
        "Validates a task, masks sensitive payload fields when `containsPHI` is set, "
        "persists it and hands it to the background worker for auditing.\n\n"
        'Body: {"id": str, "payload": {...}, "containsPHI": bool, "createdAt": ISO-8601 (optional)}'
    ),
    responses={
        400: {"description": "Malformed JSON, missing id, empty payload or invalid key."},
        500: {"description": "The task could not be saved."},
        503: {"description": "The task queue is full or shutting down."},
    },
)
async def queue_task(
    request: Request, service: IntakeService = Depends(get_intake_service)
) -> QueueResponse:
    body = await request.body()
    try:
        await service.submit(body)
    except (DecodeError, InvalidTask) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except QueueUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to save task") from exc
    return QueueResponse()
