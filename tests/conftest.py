"""Shared fixtures for the user registry tests."""

from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from user_registry_api.app.core.db import StoreError, UserNotFoundError
from user_registry_api.app.main import create_app
from user_registry_api.app.schemas.user import UserRead
from user_registry_api.app.services.avatar_service import IMAGE_URL


class InMemoryUserStore:
    """Store double keeping users in a dict keyed by name."""

    def __init__(self) -> None:
        self.users: Dict[str, UserRead] = {}
        self.inserts = 0
        self.find_error: Optional[Exception] = None
        self.insert_error: Optional[Exception] = None
        self.closed = False

    def find_by_name(self, name: str) -> UserRead:
        if self.find_error is not None:
            raise self.find_error
        try:
            return self.users[name]
        except KeyError:
            raise UserNotFoundError() from None

    def insert(self, user: UserRead) -> None:
        if self.insert_error is not None:
            raise self.insert_error
        self.inserts += 1
        self.users[user.name] = user.model_copy(update={"image": ""})

    def close(self) -> None:
        self.closed = True


class StaticAvatarClient:
    """Avatar client double returning a fixed URL without network access."""

    def __init__(self, url: str = IMAGE_URL) -> None:
        self.url = url
        self.calls = 0

    def fetch_image_url(self) -> str:
        self.calls += 1
        return self.url

    def close(self) -> None:
        pass


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def avatars() -> StaticAvatarClient:
    return StaticAvatarClient()


@pytest.fixture
def client(store, avatars) -> TestClient:
    return TestClient(create_app(store=store, avatars=avatars))


@pytest.fixture
def mongo_client() -> MagicMock:
    """A MagicMock standing in for ``pymongo.MongoClient``."""
    return MagicMock()


@pytest.fixture
def store_error() -> StoreError:
    return StoreError("connection refused")
