"""Unit tests for ``UserStore`` against a mocked MongoClient."""

from unittest.mock import patch

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, DuplicateKeyError, ServerSelectionTimeoutError

from user_registry_api.app.core.db import StoreError, UserNotFoundError, UserStore, new_user_id
from user_registry_api.app.schemas.user import UserRead


def _collection(mongo_client):
    return mongo_client["test"]["users"]


def _session(mongo_client):
    return mongo_client.start_session.return_value.__enter__.return_value


class TestFindByName:

    def test_returns_matching_user(self, mongo_client) -> None:
        oid = ObjectId()
        _collection(mongo_client).find_one.return_value = {"_id": oid, "user": "alice"}
        store = UserStore(mongo_client)

        user = store.find_by_name("alice")

        assert user == UserRead(id=str(oid), name="alice", image="")
        _collection(mongo_client).find_one.assert_called_once_with(
            {"user": "alice"}, session=_session(mongo_client)
        )

    def test_miss_raises_not_found(self, mongo_client) -> None:
        _collection(mongo_client).find_one.return_value = None
        store = UserStore(mongo_client)

        with pytest.raises(UserNotFoundError) as excinfo:
            store.find_by_name("nobody")

        assert str(excinfo.value) == "not found"

    def test_driver_error_raises_store_error(self, mongo_client) -> None:
        _collection(mongo_client).find_one.side_effect = AutoReconnect("connection reset")
        store = UserStore(mongo_client)

        with pytest.raises(StoreError, match="connection reset"):
            store.find_by_name("alice")

    def test_not_found_is_not_a_store_error(self) -> None:
        assert not issubclass(UserNotFoundError, StoreError)


class TestInsert:

    def test_writes_name_and_id_only(self, mongo_client) -> None:
        """The transient image is never persisted."""
        user = UserRead(id=new_user_id(), name="alice", image="https://example.com/a.png")
        store = UserStore(mongo_client)

        store.insert(user)

        _collection(mongo_client).insert_one.assert_called_once_with(
            {"_id": ObjectId(user.id), "user": "alice"}, session=_session(mongo_client)
        )

    def test_driver_error_raises_store_error(self, mongo_client) -> None:
        _collection(mongo_client).insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
        store = UserStore(mongo_client)

        with pytest.raises(StoreError, match="E11000"):
            store.insert(UserRead(id=new_user_id(), name="alice"))


class TestSessions:

    def test_each_operation_uses_its_own_session(self, mongo_client) -> None:
        _collection(mongo_client).find_one.return_value = None
        store = UserStore(mongo_client)

        store.insert(UserRead(id=new_user_id(), name="alice"))
        with pytest.raises(UserNotFoundError):
            store.find_by_name("bob")

        assert mongo_client.start_session.call_count == 2
        assert mongo_client.start_session.return_value.__exit__.call_count == 2

    def test_configured_database_and_collection(self, mongo_client) -> None:
        UserStore(mongo_client, "registry", "people")

        mongo_client.__getitem__.assert_called_with("registry")
        mongo_client["registry"].__getitem__.assert_called_with("people")


class TestConnect:

    def test_empty_url_is_fatal(self) -> None:
        with pytest.raises(StoreError, match="MONGO_DB_URL"):
            UserStore.connect("")

    def test_unreachable_server_is_fatal(self) -> None:
        with patch("user_registry_api.app.core.db.MongoClient") as client_cls:
            client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError(
                "localhost:27017: connection refused"
            )
            with pytest.raises(StoreError, match="connection refused"):
                UserStore.connect("mongodb://localhost:27017")

    def test_pings_and_returns_store(self) -> None:
        with patch("user_registry_api.app.core.db.MongoClient") as client_cls:
            store = UserStore.connect("mongodb://db:27017", "test", "users")

        client_cls.assert_called_once_with("mongodb://db:27017")
        client_cls.return_value.admin.command.assert_called_once_with("ping")
        assert isinstance(store, UserStore)

    def test_close_closes_client(self, mongo_client) -> None:
        UserStore(mongo_client).close()

        mongo_client.close.assert_called_once_with()


def test_new_user_id_is_object_id_hex() -> None:
    first, second = new_user_id(), new_user_id()

    assert ObjectId.is_valid(first)
    assert len(first) == 24
    assert first != second
