"""Process entry point — `python -m todo_service` serves the API with uvicorn."""

import logging

import uvicorn

from todo_service.config import get_settings
from todo_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Server running on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "todo_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
