from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from core.errors import ProtocolError, TransportError
from core.providers import storage_from_request
from providers.storage import StorageProvider

router = APIRouter(prefix="/files", tags=["files"])


class UploadResponseModel(BaseModel):
    name: str
    url: str
    result: Any = None


class UrlResponseModel(BaseModel):
    name: str
    url: str
    upload: str


class DeleteResponseModel(BaseModel):
    name: str
    deleted: bool


def _backend_error(exc: Exception) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Storage backend error: {exc}")


# ---------------------------------------------------------------------
# POST /files/upload
# ---------------------------------------------------------------------
@router.post("/upload", response_model=UploadResponseModel)
async def upload_file(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    storage: StorageProvider = Depends(storage_from_request),
):
    key = (name or file.filename or "").strip()
    if not key:
        raise HTTPException(status_code=400, detail="File name is required.")

    contents = await file.read()
    try:
        # storage calls are blocking HTTP; keep them off the event loop
        result = await run_in_threadpool(storage.set, key, contents)
    except (ProtocolError, TransportError) as exc:
        raise _backend_error(exc)
    return UploadResponseModel(name=key, url=storage.url(key), result=result)


# ---------------------------------------------------------------------
# GET /files/{name}
# ---------------------------------------------------------------------
def _file_info(name: str, storage: StorageProvider) -> Dict[str, Any]:
    try:
        info = storage.info(name)
    except TransportError as exc:
        raise _backend_error(exc)
    if not info:
        raise HTTPException(status_code=404, detail="File not found")
    return info


@router.get("/{name:path}")
def fetch_file(
    name: str,
    view: Optional[Literal["info", "url"]] = Query(None),
    storage: StorageProvider = Depends(storage_from_request),
):
    """
    Object bytes by default. Metadata is selected with ?view= so any key,
    including ones ending in "/info", stays fetchable:
      ?view=info -> stored file info (404 when absent)
      ?view=url  -> public url + upload endpoint
    """
    if view == "info":
        return _file_info(name, storage)
    if view == "url":
        return UrlResponseModel(name=name, url=storage.url(name), upload=storage.upload())

    try:
        data = storage.get(name)
    except TransportError as exc:
        if exc.status_code == 404:
            raise HTTPException(status_code=404, detail="File not found")
        raise _backend_error(exc)
    return Response(content=data, media_type="application/octet-stream")


# ---------------------------------------------------------------------
# DELETE /files/{name}
# ---------------------------------------------------------------------
@router.delete("/{name:path}", response_model=DeleteResponseModel)
def delete_file(name: str, storage: StorageProvider = Depends(storage_from_request)):
    try:
        deleted = storage.delete(name)
    except (ProtocolError, TransportError) as exc:
        raise _backend_error(exc)
    return DeleteResponseModel(name=name, deleted=deleted)
