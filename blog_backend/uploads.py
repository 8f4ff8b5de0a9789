"""
Image upload and the read-only route that serves uploaded files.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import Response

from blog_backend.config import Settings
from blog_backend.dependencies import get_app_settings, get_storage_client
from blog_backend.schemas import UploadResponse
from blog_backend.storage import StorageClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])
files_router = APIRouter(tags=["uploads"])


def generate_upload_name(filename: str | None, content_type: str | None) -> str:
    """Return ``<uuid4 hex><ext>``, keeping the original extension if any."""
    suffix = Path(filename or "").suffix.lower()
    if not suffix and content_type:
        suffix = mimetypes.guess_extension(content_type) or ""
    return f"{uuid4().hex}{suffix}"


def public_upload_url(request: Request, uploads_path: str, name: str) -> str:
    base = str(request.base_url).rstrip("/")
    return f"{base}/{uploads_path.strip('/')}/{name}"


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    request: Request,
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_app_settings),
    storage: StorageClient = Depends(get_storage_client),
):
    if image is None:
        raise HTTPException(status_code=400, detail="Please upload a file")

    content_type = image.content_type or ""
    if not content_type.startswith("image/"):
        logger.warning("Rejected upload %r with type %r", image.filename, content_type)
        raise HTTPException(
            status_code=400, detail="Not an image! Please upload only images."
        )

    max_bytes = settings.max_upload_bytes
    data = await image.read(max_bytes + 1)
    if len(data) > max_bytes:
        logger.warning("Rejected upload %r over %d bytes", image.filename, max_bytes)
        raise HTTPException(
            status_code=400,
            detail=f"File is too large. Maximum size is {max_bytes / (1024 * 1024):g}MB",
        )

    name = generate_upload_name(image.filename, content_type)
    storage.save(name, data)
    logger.info("Stored upload %s (%d bytes)", name, len(data))

    return UploadResponse(
        message="File uploaded successfully",
        imageUrl=public_upload_url(request, settings.uploads_path, name),
    )


@files_router.get("/{filename}")
def get_uploaded_file(
    filename: str, storage: StorageClient = Depends(get_storage_client)
):
    try:
        data = storage.get_bytes(filename)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
