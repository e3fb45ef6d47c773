from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class WorkerSettings(BaseSettings):
    """Configuration for the task queue feeding the background worker."""
    QUEUE_CAPACITY: int = Field(default=100, ge=1)
    ENQUEUE_TIMEOUT_SEC: float = Field(default=5.0, gt=0)

    model_config = ConfigDict(env_file=".env", extra="ignore")

def get_worker_settings() -> WorkerSettings:
    """Return a fresh worker settings instance."""
    return WorkerSettings()
