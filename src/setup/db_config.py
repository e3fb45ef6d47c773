from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class StoreSettings(BaseSettings):
    """Location of the SQLite task store."""
    DB_PATH: str = "taskbeat.db"
    TABLE_NAME: str = "Tasks"

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_store_settings() -> StoreSettings:
    return StoreSettings()  # type: ignore[call-arg]
