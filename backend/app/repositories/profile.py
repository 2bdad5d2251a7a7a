"""
Singleton profile storage.

The profile lives under one fixed key, so the collection can never hold a
second record no matter how many writers race on the first upsert.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from backend.app.core.errors import translate_storage_errors
from backend.app.models.profile import Profile
from backend.app.observability.logging import log_event
from backend.app.repositories.documents import BaseRepository, serialize_document

PROFILE_KEY = "profile"


class ProfileRepository(BaseRepository):
    collection_name = "profiles"
    label = "Profile"
    model = Profile
    key_aliases = {"university": "institution"}

    async def _load(self) -> dict[str, Any] | None:
        with translate_storage_errors("reading profile"):
            return await self.collection.find_one({"_id": PROFILE_KEY})

    async def get(self) -> dict[str, Any]:
        doc = await self._load()
        return serialize_document(doc) if doc is not None else {}

    async def upsert(self, payload: Any) -> dict[str, Any]:
        existing = await self._load()
        doc = self.validate(self._merge(existing, payload))
        now = datetime.now(timezone.utc)
        created_at = (existing or {}).get("createdAt") or now
        doc.update({"_id": PROFILE_KEY, "createdAt": created_at, "updatedAt": now})
        with translate_storage_errors("writing profile"):
            await self.collection.replace_one({"_id": PROFILE_KEY}, doc, upsert=True)
        log_event("profile_saved", created=existing is None)
        return serialize_document(doc)
