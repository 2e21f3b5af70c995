"""Entrypoint: python -m booktalk_service"""
from __future__ import annotations

import uvicorn

from booktalk_service.config import settings
from booktalk_service.logging_config import configure_logging


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "booktalk_service.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
