"""Entry point for the user registry service.

This script serves the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration is read from environment variables; ``MONGO_DB_URL`` is
required.  ``HOST`` and ``PORT`` default to ``0.0.0.0`` and ``7000``.

Usage:
    MONGO_DB_URL=mongodb://localhost:27017 python run.py
"""
import asyncio
import sys

from uvicorn import Config, Server

from user_registry_api.app.core.config import settings
from user_registry_api.app.main import app


async def run_api() -> None:
    """Start the registry API using Uvicorn."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()
    # uvicorn returns instead of raising when the lifespan startup fails.
    if not server.started:
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        pass
