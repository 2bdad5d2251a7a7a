"""
Unit tests for the MongoDB connection lifecycle cache.
"""

import asyncio

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from backend.app.core.db.mongo import MongoConnectionCache
from backend.app.core.errors import StorageError
from backend.app.storage.object_store import ChunkedObjectStore
from tests.fakes import FakeGridFSBucket, FakeMongoClient, make_settings


class SlowFakeClient(FakeMongoClient):
    """Client whose ping yields to the loop so concurrent callers overlap."""

    created: list["SlowFakeClient"] = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        SlowFakeClient.created.append(self)
        original_command = self.admin.command

        async def slow_command(name):
            await asyncio.sleep(0.01)
            return await original_command(name)

        self.admin.command = slow_command


class UnreachableClient(FakeMongoClient):
    async def _fail(self, name):
        raise ServerSelectionTimeoutError("no servers available")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.admin.command = self._fail


class TestMongoConnectionCache:
    @pytest.mark.asyncio
    async def test_concurrent_acquire_makes_one_attempt(self):
        # Arrange
        SlowFakeClient.created = []
        cache = MongoConnectionCache(make_settings(), client_factory=SlowFakeClient)

        # Act
        connections = await asyncio.gather(*(cache.acquire() for _ in range(10)))

        # Assert
        assert cache.attempts == 1
        assert len(SlowFakeClient.created) == 1
        assert all(conn is connections[0] for conn in connections)

    @pytest.mark.asyncio
    async def test_memoized_connection_skips_network(self):
        # Arrange
        cache = MongoConnectionCache(make_settings(), client_factory=FakeMongoClient)
        first = await cache.acquire()

        # Act
        second = await cache.acquire()

        # Assert
        assert second is first
        assert first.client.commands == ["ping"]
        assert cache.is_connected

    @pytest.mark.asyncio
    async def test_client_receives_fail_fast_options(self):
        settings = make_settings(mongo_server_selection_timeout_ms=250, mongo_db_name="site")
        cache = MongoConnectionCache(settings, client_factory=FakeMongoClient)

        connection = await cache.acquire()

        assert connection.client.options["serverSelectionTimeoutMS"] == 250
        assert connection.client.options["tz_aware"] is True
        assert connection.db.name == "site"

    @pytest.mark.asyncio
    async def test_failed_attempt_is_not_memoized(self):
        # Arrange
        factories = [UnreachableClient, FakeMongoClient]
        clients = []

        def factory(*args, **kwargs):
            client = factories.pop(0)(*args, **kwargs)
            clients.append(client)
            return client

        cache = MongoConnectionCache(make_settings(), client_factory=factory)

        # Act / Assert
        with pytest.raises(StorageError):
            await cache.acquire()
        assert not cache.is_connected
        assert clients[0].closed

        connection = await cache.acquire()
        assert connection.client is clients[1]
        assert cache.attempts == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_a_failure(self):
        cache = MongoConnectionCache(make_settings(), client_factory=UnreachableClient)

        results = await asyncio.gather(*(cache.acquire() for _ in range(3)), return_exceptions=True)

        assert all(isinstance(r, StorageError) for r in results)
        assert cache.attempts == 1

    @pytest.mark.asyncio
    async def test_object_store_is_created_once(self):
        cache = MongoConnectionCache(
            make_settings(object_chunk_size_bytes=8),
            client_factory=FakeMongoClient,
            bucket_factory=FakeGridFSBucket,
        )

        first = await cache.object_store()
        second = await cache.object_store()

        assert isinstance(first, ChunkedObjectStore)
        assert first is second
        assert first.chunk_size == 8

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        cache = MongoConnectionCache(make_settings(), client_factory=FakeMongoClient)
        connection = await cache.acquire()

        await cache.close()

        assert connection.client.closed
        assert not cache.is_connected
