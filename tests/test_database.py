"""
Contacts API — Database Accessor Tests
========================================

What we test:
    ✅ initialize() returns and stores the selected handle
    ✅ get_handle() before initialization raises NotInitializedError
    ✅ A failed connection raises StorageError and leaves the accessor disconnected
    ✅ close() releases the client and returns to the disconnected state
"""

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from contacts_api.config import Settings
from contacts_api.database import DatabaseAccessor
from contacts_api.exceptions import NotInitializedError, StorageError
from tests.fakes import FakeMongoClient


def make_accessor(client, database_name="contacts_test"):
    return DatabaseAccessor(
        uri="mongodb://fake",
        database_name=database_name,
        client_factory=lambda uri: client,
    )


class TestInitialize:

    @pytest.mark.asyncio
    async def test_returns_selected_database(self):
        client = FakeMongoClient()
        accessor = make_accessor(client, database_name="cse341")

        handle = await accessor.initialize()

        assert handle.name == "cse341"
        assert accessor.get_handle() is handle
        assert accessor.is_initialized is True

    @pytest.mark.asyncio
    async def test_second_call_reuses_handle(self):
        calls = []

        def factory(uri):
            calls.append(uri)
            return FakeMongoClient(uri)

        accessor = DatabaseAccessor("mongodb://fake", "contacts_test", client_factory=factory)
        first = await accessor.initialize()
        second = await accessor.initialize()

        assert first is second
        assert calls == ["mongodb://fake"]

    @pytest.mark.asyncio
    async def test_unreachable_server_raises_storage_error(self):
        client = FakeMongoClient(ping_error=ServerSelectionTimeoutError("no servers"))
        accessor = make_accessor(client)

        with pytest.raises(StorageError) as exc_info:
            await accessor.initialize()

        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"
        assert accessor.is_initialized is False
        assert client.closed is True

    @pytest.mark.asyncio
    async def test_invalid_uri_raises_storage_error(self):
        def factory(uri):
            raise ConfigurationError("bad uri")

        accessor = DatabaseAccessor("not-a-uri", "contacts_test", client_factory=factory)

        with pytest.raises(StorageError):
            await accessor.initialize()
        with pytest.raises(NotInitializedError):
            accessor.get_handle()


class TestGetHandle:

    def test_before_initialize_raises(self):
        accessor = make_accessor(FakeMongoClient())
        with pytest.raises(NotInitializedError, match="not connected"):
            accessor.get_handle()

    def test_not_initialized_is_not_a_storage_error(self):
        assert not issubclass(NotInitializedError, StorageError)


class TestPingAndClose:

    @pytest.mark.asyncio
    async def test_ping_false_when_disconnected(self):
        accessor = make_accessor(FakeMongoClient())
        assert await accessor.ping() is False

    @pytest.mark.asyncio
    async def test_ping_true_when_connected(self):
        accessor = make_accessor(FakeMongoClient())
        await accessor.initialize()
        assert await accessor.ping() is True

    @pytest.mark.asyncio
    async def test_ping_false_when_server_stops_answering(self):
        client = FakeMongoClient()
        accessor = make_accessor(client)
        handle = await accessor.initialize()
        handle.ping_error = ServerSelectionTimeoutError("gone")

        assert await accessor.ping() is False

    @pytest.mark.asyncio
    async def test_close_disconnects(self):
        client = FakeMongoClient()
        accessor = make_accessor(client)
        await accessor.initialize()

        await accessor.close()

        assert client.closed is True
        assert accessor.is_initialized is False
        with pytest.raises(NotInitializedError):
            accessor.get_handle()


def test_from_settings_uses_configured_database():
    settings = Settings(mongodb_uri="mongodb://db.example:27017", mongodb_database="cse341")
    accessor = DatabaseAccessor.from_settings(settings)
    assert accessor.database_name == "cse341"
    assert accessor.is_initialized is False
