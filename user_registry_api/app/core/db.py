"""
MongoDB integration for the user registry.

This module provides ``UserStore``, a thin accessor over one MongoDB
collection.  The store wraps a single ``MongoClient`` created at
application start; the client owns the connection pool and is safe to
share between request threads.  Every operation borrows a fresh client
session from it and ends that session once the operation returns, so
no session is reused across requests.

Stored documents have the layout ``{"_id": ObjectId, "user": <name>}``.
The avatar ``image`` shown in API responses is never persisted.

Name uniqueness is not enforced here: callers perform a
check‑then‑insert sequence, and two concurrent creates with the same
name may both insert.
"""

import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..schemas.user import UserRead
from .config import settings


logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised for any failure reported by the MongoDB driver."""


class UserNotFoundError(LookupError):
    """Raised when no stored document matches a lookup."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


class UserStore:
    """Accessor for the ``users`` collection."""

    def __init__(
        self,
        client: MongoClient,
        db_name: str = "test",
        collection_name: str = "users",
    ) -> None:
        self._client = client
        self._collection: Collection = client[db_name][collection_name]

    @classmethod
    def connect(
        cls,
        url: Optional[str] = None,
        db_name: Optional[str] = None,
        collection_name: Optional[str] = None,
    ) -> "UserStore":
        """Open the shared client and verify the server is reachable.

        Parameters
        ----------
        url : Optional[str]
            MongoDB connection string.  Defaults to ``settings.mongo_db_url``.
        db_name, collection_name : Optional[str]
            Override the configured database and collection names.

        Raises
        ------
        StoreError
            If ``url`` is empty, malformed, or the server does not answer
            a ``ping``.  Startup treats this as fatal.
        """
        url = url if url is not None else settings.mongo_db_url
        if not url:
            raise StoreError("MONGO_DB_URL is not set")
        try:
            client: MongoClient = MongoClient(url)
            client.admin.command("ping")
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        logger.info("Connected to MongoDB at %s", client.address)
        return cls(
            client,
            db_name or settings.mongo_db_name,
            collection_name or settings.mongo_collection,
        )

    def close(self) -> None:
        """Close the underlying client and its connection pool."""
        self._client.close()
        logger.info("MongoDB connection closed")

    def find_by_name(self, name: str) -> UserRead:
        """Return the first user whose stored name equals ``name`` exactly.

        Raises ``UserNotFoundError`` when nothing matches and
        ``StoreError`` on any driver failure.
        """
        try:
            with self._client.start_session() as session:
                doc = self._collection.find_one({"user": name}, session=session)
        except PyMongoError as exc:
            logger.error("Lookup of user %r failed: %s", name, exc)
            raise StoreError(str(exc)) from exc
        if doc is None:
            logger.debug("No user named %r", name)
            raise UserNotFoundError()
        return _to_user(doc)

    def insert(self, user: UserRead) -> None:
        """Append ``user`` to the collection without checking for duplicates."""
        try:
            with self._client.start_session() as session:
                self._collection.insert_one(_to_document(user), session=session)
        except PyMongoError as exc:
            logger.error("Insert of user %r failed: %s", user.name, exc)
            raise StoreError(str(exc)) from exc


def new_user_id() -> str:
    """Return a fresh 24‑hex ObjectId string."""
    return str(ObjectId())


def _to_user(doc: Dict[str, Any]) -> UserRead:
    return UserRead(id=str(doc["_id"]), name=doc.get("user", ""))


def _to_document(user: UserRead) -> Dict[str, Any]:
    return {"_id": ObjectId(user.id), "user": user.name}


def get_store(request: Request) -> UserStore:
    """FastAPI dependency returning the store opened at startup."""
    return request.app.state.store
