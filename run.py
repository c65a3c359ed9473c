"""Entry point for the Storage API.

Starts the FastAPI application under Uvicorn.  Configuration such as
MONGO_URI, DB_NAME and PORT is read from the environment or from a
`.env` file in the working directory (see `.env.example`).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from storage_api.app.core.config import settings
from storage_api.app.core.logging_config import setup_logging


async def run_api() -> None:
    """Serve the API on ``settings.host``/``settings.port`` (default port 5000)."""
    setup_logging(
        settings.log_level,
        settings.log_file or None,
        driver_level=settings.mongo_log_level,
        access_log=settings.access_log,
    )
    config = Config(
        app="storage_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        access_log=settings.access_log,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server running on http://localhost:%s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
