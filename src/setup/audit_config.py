from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class AuditSettings(BaseSettings):
    """Audit trail file and the tag written on every line."""
    AUDIT_LOG_PATH: str = "taskbeat_audit.log"
    AUDIT_SOURCE_TAG: str = "TaskBeat"

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_audit_settings() -> AuditSettings:
    return AuditSettings()
