"""
Router factory for the uniform CRUD surface of one entity collection.

Both addressing styles are served: the id in the path, or the id in the body
(PUT) / query string (DELETE) as the admin forms send it.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from backend.app.api.deps import repository_provider
from backend.app.core.auth.jwt_auth import require_admin
from backend.app.core.errors import ValidationError
from backend.app.repositories.documents import DocumentRepository


def build_crud_router(
    prefix: str,
    repository_cls: type[DocumentRepository],
    tags: list[str],
    list_filters: tuple[str, ...] = (),
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)
    get_repository = repository_provider(repository_cls)
    label = repository_cls.label
    admin_only = [Depends(require_admin)]

    @router.get("")
    async def list_records(request: Request, repo: DocumentRepository = Depends(get_repository)):
        filters = {k: v for k, v in request.query_params.items() if k in list_filters}
        return await repo.list(filters)

    @router.post("", status_code=status.HTTP_201_CREATED, dependencies=admin_only)
    async def create_record(payload: Any = Body(...), repo: DocumentRepository = Depends(get_repository)):
        return await repo.create(payload)

    @router.put("", dependencies=admin_only)
    async def update_record_from_body(payload: Any = Body(...), repo: DocumentRepository = Depends(get_repository)):
        record_id = payload.get("_id") if isinstance(payload, dict) else None
        if not record_id:
            raise ValidationError(f"{label} ID is required")
        return await repo.update(record_id, payload)

    @router.delete("", dependencies=admin_only)
    async def delete_record_from_query(
        record_id: Optional[str] = Query(None, alias="id"),
        repo: DocumentRepository = Depends(get_repository),
    ):
        if not record_id:
            raise ValidationError(f"{label} ID is required")
        await repo.delete(record_id)
        return {"success": True}

    @router.get("/{record_id}")
    async def get_record(record_id: str, repo: DocumentRepository = Depends(get_repository)):
        return await repo.get(record_id)

    @router.put("/{record_id}", dependencies=admin_only)
    async def update_record(
        record_id: str,
        payload: Any = Body(...),
        repo: DocumentRepository = Depends(get_repository),
    ):
        return await repo.update(record_id, payload)

    @router.delete("/{record_id}", dependencies=admin_only)
    async def delete_record(record_id: str, repo: DocumentRepository = Depends(get_repository)):
        await repo.delete(record_id)
        return {"success": True}

    return router
