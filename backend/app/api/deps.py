"""
FastAPI dependencies that hand the application-owned connection cache,
database handle, object store and repositories to route handlers.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import Depends, Request

from backend.app.core.db.mongo import MongoConnectionCache
from backend.app.repositories.documents import BaseRepository
from backend.app.storage.object_store import ChunkedObjectStore


def get_connection_cache(request: Request) -> MongoConnectionCache:
    return request.app.state.mongo


async def get_database(cache: MongoConnectionCache = Depends(get_connection_cache)) -> Any:
    connection = await cache.acquire()
    return connection.db


async def get_object_store(cache: MongoConnectionCache = Depends(get_connection_cache)) -> ChunkedObjectStore:
    return await cache.object_store()


def repository_provider(repository_cls: type[BaseRepository]) -> Callable[..., Any]:
    async def provide(db: Any = Depends(get_database)):
        return repository_cls(db)

    provide.__name__ = f"get_{repository_cls.__name__}"
    return provide
