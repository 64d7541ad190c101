# homepro/routers/upload.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..auth import get_principal
from ..config import settings
from ..deps import get_upload_storage
from ..services.image_compression import compress_image
from ..services.storage import UploadRequest, UploadStorage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp", "application/pdf")

DATA_URL_MESSAGE = "Using data URL (development mode). Configure cloud storage for production."
NO_REMOTE_WARNING = "No cloud storage configured. Using data URL fallback (not recommended for production)."


def _is_dev() -> bool:
    return (settings.app_env or "local").strip().lower() in ("local", "dev", "development")


@router.post("")
def upload_file(
    file: Optional[UploadFile] = File(default=None),
    kind: str = Form(default="photo", alias="type"),
    p=Depends(get_principal),
    storage: UploadStorage = Depends(get_upload_storage),
):
    """
    Validate, optionally compress, then store one file.

    Images are re-encoded as WebP when that makes them smaller. The reported
    size is the stored size; originalSize is what the client sent.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only images (JPEG, PNG, WebP) and PDFs are allowed.",
        )

    data = file.file.read()
    original_size = len(data)
    if original_size > settings.upload_max_bytes:
        limit_mb = settings.upload_max_bytes // (1024 * 1024)
        raise HTTPException(
            status_code=400,
            detail=f"File size ({original_size / (1024 * 1024):.2f}MB) exceeds {limit_mb}MB limit",
        )

    filename = file.filename or "upload"
    compressed = compress_image(
        data,
        content_type=content_type,
        filename=filename,
        max_dimension=settings.image_max_dimension,
        quality=settings.image_quality,
    )
    if compressed is not None:
        log.info(
            "upload_compressed",
            extra={"original_bytes": original_size, "compressed_bytes": len(compressed.data)},
        )
        body, stored_type, stored_name = compressed.data, compressed.content_type, compressed.filename
    else:
        body, stored_type, stored_name = data, content_type, filename

    stored = storage.store(
        UploadRequest(data=body, filename=stored_name, content_type=stored_type, user_id=p.user_id, kind=kind)
    )

    out = {
        "url": stored.url,
        "filename": filename,
        "size": len(body),
        "originalSize": original_size,
        "type": stored_type,
        "compressed": compressed is not None,
        "storage": stored.storage,
    }
    if stored.storage == "data-url":
        out["message"] = DATA_URL_MESSAGE if _is_dev() else "File uploaded successfully."
        if not storage.has_remote():
            out["warning"] = NO_REMOTE_WARNING
    return out
