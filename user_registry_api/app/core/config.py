"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
the MongoDB connection string, which has no sensible default: an empty
``MONGO_DB_URL`` aborts startup (see ``UserStore.connect``).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Registry API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Connection string for the document store, e.g.
    # ``mongodb://localhost:27017``.  Read once at process start.
    mongo_db_url: str = os.getenv("MONGO_DB_URL", "")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "test")
    mongo_collection: str = os.getenv("MONGO_COLLECTION", "users")

    # Address the HTTP server binds to when started through ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "7000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
