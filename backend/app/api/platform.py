"""
Platform-level endpoints for health and runtime inspection.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backend.app.api.deps import get_connection_cache
from backend.app.core.config import Settings
from backend.app.core.db.mongo import MongoConnectionCache
from backend.app.core.errors import translate_storage_errors


router = APIRouter(prefix="/api/platform", tags=["platform"])


@router.get("/health")
async def health(cache: MongoConnectionCache = Depends(get_connection_cache)):
    connection = await cache.acquire()
    with translate_storage_errors("health ping"):
        await connection.client.admin.command("ping")
    return {"status": "ok", "database": cache.settings.mongo_db_name}


@router.get("/config")
async def platform_config(request: Request):
    settings: Settings = request.app.state.settings
    cache: MongoConnectionCache = request.app.state.mongo
    return {
        "app_name": settings.app_name,
        "app_env": settings.app_env,
        "database": settings.mongo_db_name,
        "connected": cache.is_connected,
        "connection_attempts": cache.attempts,
        "object_bucket": settings.object_bucket_name,
        "object_chunk_size_bytes": settings.object_chunk_size_bytes,
        "max_upload_bytes": settings.max_upload_bytes,
        "admin_login_enabled": bool(settings.admin_username and settings.admin_password),
    }
