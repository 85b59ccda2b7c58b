"""
HTTP routes for the icon service.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import (
    HTMLResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
    StreamingResponse,
)
from starlette.datastructures import UploadFile

from iconbox import views
from iconbox.auth import is_authorized, issue_session, password_matches
from iconbox.config import Settings, get_settings
from iconbox.dependencies import get_directory_store, get_object_store
from iconbox.directory import DirectoryStore
from iconbox.errors import ServerConfigurationError
from iconbox.schemas import IconEntry, IconManifest
from iconbox.storage import DEFAULT_CONTENT_TYPE, ObjectStore

logger = logging.getLogger(__name__)

router = APIRouter()

ICON_NAME_PATTERN = re.compile(r"[a-zA-Z]+")
FILE_CACHE_CONTROL = "public, max-age=31536000"


def stored_filename(name: str) -> str:
    return f"{name}.png"


def _require_object_store(store: Optional[ObjectStore]) -> ObjectStore:
    if store is None:
        raise ServerConfigurationError("object store not bound")
    return store


def _require_directory_store(store: Optional[DirectoryStore]) -> DirectoryStore:
    if store is None:
        raise ServerConfigurationError("directory store not bound")
    return store


@router.get("/", response_class=HTMLResponse)
def index(request: Request, settings: Settings = Depends(get_settings)):
    if not is_authorized(request, settings.admin_password):
        return HTMLResponse(views.LOGIN_PAGE)
    return HTMLResponse(views.UPLOAD_PAGE)


@router.post("/auth/login")
def login(
    password: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
):
    if not password_matches(password, settings.admin_password):
        logger.warning("Rejected admin login attempt")
        return HTMLResponse(views.LOGIN_FAILED_PAGE, status_code=403)

    response = RedirectResponse("/", status_code=302)
    issue_session(response, settings.admin_password)
    return response


@router.post("/api/upload", response_class=PlainTextResponse)
async def upload_icon(
    request: Request,
    settings: Settings = Depends(get_settings),
    objects: Optional[ObjectStore] = Depends(get_object_store),
    directory: Optional[DirectoryStore] = Depends(get_directory_store),
):
    """
    Store an icon blob and index it by name.

    The session is checked before the body is read, so a malformed body
    from an anonymous client still gets 401. The blob is written before
    the mapping; the two writes are not atomic, so a failure in between
    leaves an unindexed blob behind.
    """
    if not is_authorized(request, settings.admin_password):
        raise HTTPException(status_code=401, detail="Unauthorized")

    async with request.form() as form:
        name = form.get("name")
        file = form.get("file")
        if not isinstance(name, str) or not ICON_NAME_PATTERN.fullmatch(name):
            logger.info("Rejected upload with invalid name %r", name)
            raise HTTPException(
                status_code=400,
                detail="Missing name or name contains non-letter characters",
            )
        if not isinstance(file, UploadFile):
            raise HTTPException(status_code=400, detail="Missing file")
        data = await file.read()
        content_type = file.content_type or ""

    if not data:
        raise HTTPException(status_code=400, detail="Empty file")

    objects = _require_object_store(objects)
    directory = _require_directory_store(directory)

    # Icons are always served as PNG; anything non-image is labelled as such.
    if not content_type.startswith("image/"):
        content_type = DEFAULT_CONTENT_TYPE

    filename = stored_filename(name)
    await run_in_threadpool(
        objects.put_object, filename, data, content_type=content_type
    )
    await run_in_threadpool(directory.put, name, filename)
    logger.info("Stored icon %s as %s (%d bytes)", name, filename, len(data))
    return "OK"


@router.get("/api/icon")
def list_icons(
    request: Request,
    directory: Optional[DirectoryStore] = Depends(get_directory_store),
):
    directory = _require_directory_store(directory)
    origin = f"{request.url.scheme}://{request.url.netloc}"

    icons = []
    for name in directory.list_keys():
        filename = directory.get(name)
        if filename is None:
            # Removed between list and get.
            continue
        icons.append(IconEntry(name=name, url=f"{origin}/file/{filename}"))

    manifest = IconManifest(icons=icons)
    return Response(
        content=manifest.model_dump_json(indent=2),
        media_type="application/json;charset=UTF-8",
        headers={"Access-Control-Allow-Origin": "*"},
    )


@router.get("/file/{filename:path}")
def serve_file(
    filename: str,
    objects: Optional[ObjectStore] = Depends(get_object_store),
):
    if not filename:
        raise HTTPException(status_code=404, detail="Image not found")
    objects = _require_object_store(objects)
    stored = objects.get_object(filename)
    if stored is None:
        raise HTTPException(status_code=404, detail="Image not found")

    headers = {"Cache-Control": FILE_CACHE_CONTROL}
    if stored.etag:
        headers["ETag"] = stored.etag
    if stored.size is not None:
        headers["Content-Length"] = str(stored.size)
    return StreamingResponse(
        stored.body, media_type=stored.content_type, headers=headers
    )
