"""
Binary object store on GridFS.

Payloads are split into fixed-size chunks kept in `<bucket>.chunks`, with one
metadata document per object in `<bucket>.files`. The bucket itself comes from
PyMongo, so objects written here can be read by any GridFS client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable

from bson import ObjectId
from bson.errors import InvalidId
from gridfs import AsyncGridFSBucket
from gridfs.errors import NoFile
from pymongo.errors import PyMongoError

from backend.app.core.errors import NotFoundError, StorageError, translate_storage_errors
from backend.app.observability.logging import log_event

DEFAULT_CHUNK_SIZE = 255 * 1024

BucketFactory = Callable[..., Any]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(raw: Any) -> ObjectId | None:
    if isinstance(raw, ObjectId):
        return raw
    try:
        return ObjectId(str(raw or "").strip())
    except (InvalidId, TypeError):
        return None


@dataclass
class StoredObject:
    id: ObjectId
    filename: str
    length: int
    chunk_size: int
    upload_date: datetime
    content_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": str(self.id),
            "filename": self.filename,
            "length": self.length,
            "chunkSize": self.chunk_size,
            "uploadDate": self.upload_date,
            "contentType": self.content_type,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "StoredObject":
        return cls(
            id=doc["_id"],
            filename=str(doc.get("filename") or ""),
            length=int(doc.get("length") or 0),
            chunk_size=int(doc.get("chunkSize") or DEFAULT_CHUNK_SIZE),
            upload_date=doc.get("uploadDate") or _utc_now(),
            content_type=doc.get("contentType") or (doc.get("metadata") or {}).get("contentType"),
            metadata=dict(doc.get("metadata") or {}),
        )


class ChunkedObjectStore:
    """
    Binary objects kept by PyMongo's GridFS bucket.

    Uploads, downloads and deletes go through the bucket. Listing, metadata
    lookups and chunk counts are plain queries on the bucket's collections.
    """

    def __init__(
        self,
        db: Any,
        bucket_name: str = "fs",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        bucket_factory: BucketFactory = AsyncGridFSBucket,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.bucket_name = bucket_name
        self.chunk_size = chunk_size
        self.bucket = bucket_factory(db, bucket_name=bucket_name, chunk_size_bytes=chunk_size)
        self.files = db[f"{bucket_name}.files"]
        self.chunks = db[f"{bucket_name}.chunks"]

    async def ensure_indexes(self):
        with translate_storage_errors("object store index setup"):
            await self.chunks.create_index([("files_id", 1), ("n", 1)], unique=True)
            await self.files.create_index([("filename", 1), ("uploadDate", 1)])

    async def store(
        self,
        data: bytes,
        filename: str,
        metadata: dict[str, Any] | None = None,
        content_type: str | None = None,
    ) -> ObjectId:
        """
        Write `data` as a new object and return its identifier.

        The bucket writes chunks in index order and the files document last,
        so an object only becomes visible once all of its bytes are durable.
        It aborts its own upload when a chunk write fails, but a failed files
        document write leaves the chunks behind, so those are removed here.
        """
        file_id = ObjectId()
        payload = bytes(data)
        metadata = dict(metadata or {})
        if content_type is not None:
            metadata.setdefault("contentType", content_type)

        try:
            await self.bucket.upload_from_stream_with_id(file_id, filename, payload, metadata=metadata)
        except PyMongoError as exc:
            log_event(
                "object_store_write_failed",
                severity="error",
                exc_info=exc,
                file_id=str(file_id),
                filename=filename,
            )
            await self._discard_chunks(file_id)
            raise StorageError(f"storing {filename!r} failed: {exc}") from exc

        log_event("object_stored", file_id=str(file_id), filename=filename, length=len(payload))
        return file_id

    async def _discard_chunks(self, file_id: ObjectId):
        try:
            result = await self.chunks.delete_many({"files_id": file_id})
        except PyMongoError as exc:
            log_event(
                "object_store_partial_cleanup_failed",
                severity="error",
                exc_info=exc,
                file_id=str(file_id),
            )
            return
        if result.deleted_count:
            log_event(
                "object_store_partial_cleanup",
                severity="warning",
                file_id=str(file_id),
                chunks=result.deleted_count,
            )

    async def get_metadata(self, object_id: Any) -> StoredObject:
        oid = parse_object_id(object_id)
        if oid is None:
            raise NotFoundError(f"object {object_id!r} is not a valid id", public_message="File not found")
        with translate_storage_errors("object metadata lookup"):
            doc = await self.files.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError(f"object {object_id} not found", public_message="File not found")
        return StoredObject.from_document(doc)

    async def open_stream(self, object_id: Any) -> tuple[StoredObject, AsyncIterator[bytes]]:
        """Return the object's metadata and an iterator over its chunk payloads in order."""
        info = await self.get_metadata(object_id)
        with translate_storage_errors("object download"):
            try:
                grid_out = await self.bucket.open_download_stream(info.id)
            except NoFile as exc:
                raise NotFoundError(f"object {info.id} vanished", public_message="File not found") from exc
        return info, self._iter_chunks(grid_out)

    async def _iter_chunks(self, grid_out: Any) -> AsyncIterator[bytes]:
        # readchunk raises CorruptGridFile on a missing, short or extra chunk
        with translate_storage_errors("object chunk read"):
            while True:
                data = await grid_out.readchunk()
                if not data:
                    break
                yield bytes(data)

    async def retrieve(self, object_id: Any) -> bytes:
        info, chunks = await self.open_stream(object_id)
        parts = [chunk async for chunk in chunks]
        return b"".join(parts)

    async def delete(self, object_id: Any) -> bool:
        """
        Remove the metadata document and every chunk of the object.

        Deleting an absent object is not an error; the return value tells
        whether a metadata document existed.
        """
        oid = parse_object_id(object_id)
        if oid is None:
            return False
        with translate_storage_errors("object delete"):
            try:
                await self.bucket.delete(oid)
            except NoFile:
                existed = False
            else:
                existed = True
        log_event("object_deleted", file_id=str(oid), existed=existed)
        return existed

    async def list_objects(self) -> list[StoredObject]:
        with translate_storage_errors("object listing"):
            docs = await self.files.find({}).sort([("uploadDate", -1)]).to_list(None)
        return [StoredObject.from_document(doc) for doc in docs]

    async def count_chunks(self, object_id: Any) -> int:
        oid = parse_object_id(object_id)
        if oid is None:
            return 0
        with translate_storage_errors("object chunk count"):
            return await self.chunks.count_documents({"files_id": oid})
