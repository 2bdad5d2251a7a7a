"""
Upload, download, listing and deletion of stored binary objects.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import StreamingResponse

from backend.app.api.deps import get_object_store
from backend.app.core.auth.jwt_auth import require_admin
from backend.app.core.config import Settings
from backend.app.core.errors import NotFoundError, ValidationError
from backend.app.storage.object_store import ChunkedObjectStore, StoredObject


router = APIRouter(prefix="/api/files", tags=["files"])

UPLOAD_READ_SIZE = 1024 * 1024


def _response_content_type(info: StoredObject) -> str:
    declared = info.metadata.get("contentType") or info.content_type or ""
    if "pdf" in declared:
        return "application/pdf"
    return declared or "application/octet-stream"


def _content_disposition(info: StoredObject, download: bool) -> str:
    name = str(info.metadata.get("originalName") or info.filename or "file").replace('"', "")
    disposition = "attachment" if download else "inline"
    return f'{disposition}; filename="{name}"'


async def read_upload(file: UploadFile, limit: int) -> bytes:
    """Read an upload without ever buffering more than `limit` + 1 bytes."""
    too_large = ValidationError(f"File exceeds the {limit} byte upload limit")
    if file.size is not None and file.size > limit:
        raise too_large

    buffer = bytearray()
    while True:
        piece = await file.read(min(UPLOAD_READ_SIZE, limit + 1 - len(buffer)))
        if not piece:
            break
        buffer.extend(piece)
        if len(buffer) > limit:
            raise too_large
    return bytes(buffer)


@router.get("")
async def list_files(store: ChunkedObjectStore = Depends(get_object_store)):
    return [obj.to_dict() for obj in await store.list_objects()]


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_file(
    request: Request,
    file: Optional[UploadFile] = File(None),
    store: ChunkedObjectStore = Depends(get_object_store),
):
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    settings: Settings = request.app.state.settings
    data = await read_upload(file, settings.max_upload_bytes)

    metadata = {
        "contentType": file.content_type or "application/octet-stream",
        "size": len(data),
        "originalName": file.filename,
    }
    file_id = await store.store(data, file.filename, metadata=metadata)
    return {"fileId": str(file_id), "filename": file.filename}


@router.get("/{file_id}")
async def download_file(
    file_id: str,
    download: bool = False,
    store: ChunkedObjectStore = Depends(get_object_store),
):
    info, chunks = await store.open_stream(file_id)
    headers = {
        "Content-Disposition": _content_disposition(info, download),
        "Content-Length": str(info.length),
        "X-Content-Type-Options": "nosniff",
    }
    return StreamingResponse(chunks, media_type=_response_content_type(info), headers=headers)


@router.delete("/{file_id}", dependencies=[Depends(require_admin)])
async def delete_file(file_id: str, store: ChunkedObjectStore = Depends(get_object_store)):
    await store.get_metadata(file_id)
    if not await store.delete(file_id):
        raise NotFoundError(f"object {file_id} vanished before delete", public_message="File not found")
    return {"success": True}
