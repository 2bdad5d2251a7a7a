"""
Object store tests against a real GridFS bucket.
"""

import os
import uuid
from contextlib import asynccontextmanager

import pytest
from pymongo import AsyncMongoClient

from backend.app.core.errors import NotFoundError, StorageError
from backend.app.storage.object_store import ChunkedObjectStore
from tests.integration.conftest import MONGODB_TEST_URI

pytestmark = pytest.mark.integration

CHUNK = 1024


@asynccontextmanager
async def scratch_store():
    client = AsyncMongoClient(MONGODB_TEST_URI, serverSelectionTimeoutMS=2000, tz_aware=True)
    db_name = f"portfolio_it_{uuid.uuid4().hex[:8]}"
    try:
        store = ChunkedObjectStore(client[db_name], chunk_size=CHUNK)
        await store.ensure_indexes()
        yield store, client[db_name]
    finally:
        await client.drop_database(db_name)
        await client.close()


class TestGridFSStore:
    @pytest.mark.asyncio
    async def test_round_trip_across_chunk_boundaries(self):
        async with scratch_store() as (store, _):
            payload = os.urandom(3 * CHUNK + 7)

            file_id = await store.store(payload, "paper.pdf", {"contentType": "application/pdf"})

            assert await store.retrieve(file_id) == payload
            assert await store.count_chunks(file_id) == 4
            assert (await store.get_metadata(file_id)).content_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_missing_chunk_is_storage_error(self):
        async with scratch_store() as (store, db):
            file_id = await store.store(os.urandom(3 * CHUNK), "gap.bin")
            await db["fs.chunks"].delete_one({"files_id": file_id, "n": 1})

            with pytest.raises(StorageError):
                await store.retrieve(file_id)

    @pytest.mark.asyncio
    async def test_delete_removes_every_chunk(self):
        async with scratch_store() as (store, _):
            file_id = await store.store(os.urandom(2 * CHUNK), "gone.bin")

            assert await store.delete(file_id) is True
            assert await store.delete(file_id) is False
            assert await store.count_chunks(file_id) == 0
            with pytest.raises(NotFoundError):
                await store.retrieve(file_id)
