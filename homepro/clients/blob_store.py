# homepro/clients/blob_store.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config import settings


@dataclass(frozen=True)
class StoredObject:
    url: Optional[str]
    raw: dict[str, Any]


class BlobStoreClient:
    """Public object uploads to a Vercel-Blob compatible store (PUT /<pathname>)."""

    name = "blob"

    def __init__(self, *, token: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self.token = token if token is not None else settings.blob_read_write_token
        self.base = (base_url or settings.blob_base_url).rstrip("/")

    def enabled(self) -> bool:
        return bool(self.token)

    def put(self, pathname: str, data: bytes, *, content_type: str) -> StoredObject:
        if not self.token:
            return StoredObject(None, {"error": "blob_read_write_token not set"})

        url = f"{self.base}/{pathname.lstrip('/')}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "x-content-type": content_type,
            "x-add-random-suffix": "0",
            "x-api-version": "7",
        }
        with httpx.Client(timeout=60.0) as client:
            r = client.put(url, content=data, headers=headers)
            r.raise_for_status()
            body = r.json()

        return StoredObject(url=(body or {}).get("url"), raw=body or {})
