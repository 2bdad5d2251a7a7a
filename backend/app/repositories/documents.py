"""
Document repositories.

`DocumentRepository` is the CRUD family shared by every multi-record entity:
one collection, one pydantic model, one list ordering. Documents are validated
on every write (partial updates are merged onto the stored record first, then
validated as a whole) and returned with ObjectIds rendered as strings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from backend.app.core.errors import NotFoundError, ValidationError, translate_storage_errors
from backend.app.models.base import EntityModel
from backend.app.observability.logging import log_event
from backend.app.storage.object_store import parse_object_id

META_FIELDS = ("_id", "createdAt", "updatedAt")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def serialize_document(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    return value


class BaseRepository:
    collection_name: str = ""
    label: str = "Record"
    model: type[EntityModel] = EntityModel
    object_id_fields: tuple[str, ...] = ()
    key_aliases: dict[str, str] = {}

    def __init__(self, db: Any):
        self.db = db
        self.collection = db[self.collection_name]

    def _not_found(self, record_id: Any) -> NotFoundError:
        return NotFoundError(
            f"{self.label} {record_id!r} not found in {self.collection_name}",
            public_message=f"{self.label} not found",
        )

    def _normalize_keys(self, payload: dict[str, Any]) -> dict[str, Any]:
        aliases = {name: info.alias or name for name, info in self.model.model_fields.items()}
        aliases.update(self.key_aliases)
        normalized: dict[str, Any] = {}
        for key, value in payload.items():
            if key in META_FIELDS:
                continue
            normalized[aliases.get(key, key)] = value
        return normalized

    def _merge(self, existing: dict[str, Any] | None, payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise ValidationError(f"{self.label} payload must be a JSON object")
        current = {}
        if existing is not None:
            current = {k: v for k, v in serialize_document(existing).items() if k not in META_FIELDS}
        return {**current, **self._normalize_keys(payload)}

    def validate(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            record = self.model.model_validate(payload)
        except PydanticValidationError as exc:
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
            raise ValidationError(
                f"Invalid {self.label.lower()}: {', '.join(fields)}",
                fields=fields,
            ) from exc
        return self._encode_references(record.to_document())

    def _encode_references(self, doc: dict[str, Any]) -> dict[str, Any]:
        for name in self.object_id_fields:
            value = doc.get(name)
            if value is None:
                continue
            if isinstance(value, list):
                doc[name] = [self._to_object_id(name, item) for item in value]
            elif value == "":
                doc.pop(name)
            else:
                doc[name] = self._to_object_id(name, value)
        return doc

    def _to_object_id(self, field_name: str, value: Any) -> ObjectId:
        oid = parse_object_id(value)
        if oid is None:
            raise ValidationError(f"Invalid {self.label.lower()}: {field_name}", fields=[field_name])
        return oid


class DocumentRepository(BaseRepository):
    sort: list[tuple[str, int]] = [("createdAt", -1)]

    async def check_references(self, doc: dict[str, Any]):
        return None

    async def list(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        with translate_storage_errors(f"listing {self.collection_name}"):
            docs = await self.collection.find(dict(filters or {})).sort(self.sort).to_list(None)
        return [serialize_document(doc) for doc in docs]

    async def _find(self, record_id: Any) -> dict[str, Any]:
        oid = parse_object_id(record_id)
        if oid is None:
            raise self._not_found(record_id)
        with translate_storage_errors(f"reading {self.collection_name}"):
            doc = await self.collection.find_one({"_id": oid})
        if doc is None:
            raise self._not_found(record_id)
        return doc

    async def get(self, record_id: Any) -> dict[str, Any]:
        return serialize_document(await self._find(record_id))

    async def create(self, payload: Any) -> dict[str, Any]:
        doc = self.validate(self._merge(None, payload))
        await self.check_references(doc)
        now = _utc_now()
        doc.update({"_id": ObjectId(), "createdAt": now, "updatedAt": now})
        with translate_storage_errors(f"inserting into {self.collection_name}"):
            await self.collection.insert_one(doc)
        log_event("record_created", collection=self.collection_name, record_id=str(doc["_id"]))
        return serialize_document(doc)

    async def update(self, record_id: Any, payload: Any) -> dict[str, Any]:
        existing = await self._find(record_id)
        doc = self.validate(self._merge(existing, payload))
        await self.check_references(doc)
        doc.update(
            {
                "_id": existing["_id"],
                "createdAt": existing.get("createdAt") or _utc_now(),
                "updatedAt": _utc_now(),
            }
        )
        with translate_storage_errors(f"updating {self.collection_name}"):
            result = await self.collection.replace_one({"_id": existing["_id"]}, doc)
        if result.matched_count == 0:
            # removed between the read and the write
            raise self._not_found(record_id)
        log_event("record_updated", collection=self.collection_name, record_id=str(doc["_id"]))
        return serialize_document(doc)

    async def delete(self, record_id: Any):
        oid = parse_object_id(record_id)
        if oid is None:
            raise self._not_found(record_id)
        with translate_storage_errors(f"deleting from {self.collection_name}"):
            result = await self.collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise self._not_found(record_id)
        log_event("record_deleted", collection=self.collection_name, record_id=str(oid))
