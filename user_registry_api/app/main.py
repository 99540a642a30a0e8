"""
Main entrypoint for the User Registry API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn or through ``run.py``::

    MONGO_DB_URL=mongodb://localhost:27017 uvicorn user_registry_api.app.main:app --port 7000

The MongoDB store is opened once, when the application starts.  A
missing or unusable ``MONGO_DB_URL`` aborts startup, and uvicorn exits.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .core.db import StoreError, UserStore
from .api.v1.router import router as v1_router
from .services.avatar_service import AvatarClient


logger = logging.getLogger(__name__)


def create_app(
    store: Optional[UserStore] = None,
    avatars: Optional[AvatarClient] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[UserStore]
        Store to serve requests from.  When omitted, one is connected
        from ``settings.mongo_db_url`` during startup.
    avatars : Optional[AvatarClient]
        Avatar client.  When omitted, a default client is created during
        startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Only resources opened here are closed on shutdown; injected
        # ones belong to the caller.
        opened: List = []
        if getattr(app.state, "store", None) is None:
            try:
                app.state.store = UserStore.connect()
            except StoreError as exc:
                logger.critical("Could not open MongoDB store: %s", exc)
                raise
            opened.append(app.state.store)
        if getattr(app.state, "avatars", None) is None:
            app.state.avatars = AvatarClient()
            opened.append(app.state.avatars)
        logger.info("starting user service on port %s", settings.port)
        yield
        for resource in opened:
            resource.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.avatars = avatars

    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
