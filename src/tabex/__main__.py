"""Run the HTTP service: ``python -m tabex``."""
from __future__ import annotations

import uvicorn

from tabex.adapters.fastapi import create_app
from tabex.config.settings import load_settings
from tabex.observability.logging import get_logger

logger = get_logger(__name__)


def start_server(host: str = "0.0.0.0") -> None:
    """Start the service on ``PORT`` with settings from ``.env`` and the environment."""
    settings = load_settings()
    app = create_app(settings)
    logger.info("server.starting", host=host, port=settings.port, environment=settings.environment)
    uvicorn.run(
        app,
        host=host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=65,
    )


if __name__ == "__main__":
    start_server()
