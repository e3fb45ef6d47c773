from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import inject
from fastapi import FastAPI

from src.setup.api_config import ApiSettings, get_api_settings
from src.setup.app_config import configure_di
from src.taskbeat.presentation.routes import router as tasks_router
from src.taskbeat.worker.worker import TaskWorker


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    worker = inject.instance(TaskWorker)
    worker.start()
    try:
        yield
    finally:
        await worker.stop()


def create_app(settings: ApiSettings | None = None, **di_overrides) -> FastAPI:
    """Wire dependencies and build the API; ``di_overrides`` go to ``configure_di``."""
    settings = settings or get_api_settings()
    configure_di(**di_overrides)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="PHI-aware task intake with durable storage and an audit trail",
        lifespan=_lifespan,
    )
    app.include_router(tasks_router, prefix="")
    return app
