import uvicorn

from src.setup.api_config import get_api_settings
from src.setup.logging_config import configure_logging
from src.taskbeat.presentation.app import create_app

settings = get_api_settings()
configure_logging(settings.LOG_LEVEL)

app = create_app(settings)


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=8080, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
