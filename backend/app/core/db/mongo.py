"""
MongoDB connection lifecycle.

One client per process, created lazily. Callers that arrive while the first
connection attempt is still running all await that same attempt.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

from gridfs import AsyncGridFSBucket
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from backend.app.core.config import Settings
from backend.app.core.errors import StorageError
from backend.app.observability.logging import log_event
from backend.app.storage.object_store import BucketFactory, ChunkedObjectStore

ClientFactory = Callable[..., Any]


@dataclass(frozen=True)
class MongoConnection:
    client: Any
    db: Any


class MongoConnectionCache:
    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = AsyncMongoClient,
        bucket_factory: BucketFactory = AsyncGridFSBucket,
    ):
        self.settings = settings
        self._client_factory = client_factory
        self._bucket_factory = bucket_factory
        self._connection: MongoConnection | None = None
        self._pending: asyncio.Future | None = None
        self._object_store: ChunkedObjectStore | None = None
        self.attempts = 0

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def acquire(self) -> MongoConnection:
        if self._connection is not None:
            return self._connection

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._connect())
        pending = self._pending
        try:
            # shield: a caller that gives up must not cancel the attempt for the others
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None

    async def _connect(self) -> MongoConnection:
        self.attempts += 1
        attempt = self.attempts
        settings = self.settings
        log_event("mongo_connect_started", db=settings.mongo_db_name, attempt=attempt)

        try:
            client = self._client_factory(
                settings.mongo_uri,
                serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
                connectTimeoutMS=settings.mongo_connect_timeout_ms,
                tz_aware=True,
            )
        except PyMongoError as exc:
            log_event("mongo_connect_failed", severity="error", exc_info=exc, attempt=attempt, error=str(exc))
            raise StorageError(f"invalid MongoDB configuration: {exc}") from exc

        try:
            await client.admin.command("ping")
        except PyMongoError as exc:
            log_event("mongo_connect_failed", severity="error", exc_info=exc, attempt=attempt, error=str(exc))
            await client.close()
            raise StorageError(f"could not reach MongoDB: {exc}") from exc

        connection = MongoConnection(client=client, db=client[settings.mongo_db_name])
        self._connection = connection
        log_event("mongo_connect_ready", db=settings.mongo_db_name, attempt=attempt)
        return connection

    async def object_store(self) -> ChunkedObjectStore:
        if self._object_store is not None:
            return self._object_store
        connection = await self.acquire()
        store = ChunkedObjectStore(
            connection.db,
            bucket_name=self.settings.object_bucket_name,
            chunk_size=self.settings.object_chunk_size_bytes,
            bucket_factory=self._bucket_factory,
        )
        await store.ensure_indexes()
        if self._object_store is None:
            self._object_store = store
        return self._object_store

    async def close(self):
        connection = self._connection
        self._connection = None
        self._object_store = None
        if connection is not None:
            await connection.client.close()
            log_event("mongo_connection_closed", db=self.settings.mongo_db_name)
