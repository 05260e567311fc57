"""Entry point for the Book Club API.

Starts the FastAPI application with uvicorn.  Host, port and log level
come from the same environment variables as the rest of the settings
(``HOST``, ``PORT``, ``LOG_LEVEL``); the database path and Firebase
credentials are read from ``DATABASE_URL`` and ``FIREBASE_CREDENTIALS``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from bookclub_api.app.core.config import settings
from bookclub_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
