# homepro/services/storage.py
from __future__ import annotations

import base64
import logging
import re
import secrets
import time
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..clients.blob_store import BlobStoreClient
from ..clients.cloudinary import CloudinaryClient

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadRequest:
    data: bytes
    filename: str
    content_type: str
    user_id: int
    kind: str  # photo|receipt|project-photo|...


@dataclass(frozen=True)
class StoredFile:
    url: str
    storage: str


class StorageStrategy(Protocol):
    name: str

    def enabled(self) -> bool: ...

    def store(self, req: UploadRequest) -> Optional[str]: ...


def _safe_name(filename: str) -> str:
    return re.sub(r"[^a-zA-Z0-9.-]", "_", filename or "file")


def object_path(req: UploadRequest) -> str:
    stamp = int(time.time() * 1000)
    return f"{req.user_id}/{req.kind}/{stamp}-{secrets.token_hex(4)}-{_safe_name(req.filename)}"


class BlobStorage:
    name = "blob"

    def __init__(self, client: Optional[BlobStoreClient] = None) -> None:
        self.client = client or BlobStoreClient()

    def enabled(self) -> bool:
        return self.client.enabled()

    def store(self, req: UploadRequest) -> Optional[str]:
        return self.client.put(object_path(req), req.data, content_type=req.content_type).url


class CloudinaryStorage:
    name = "cloudinary"

    def __init__(self, client: Optional[CloudinaryClient] = None) -> None:
        self.client = client or CloudinaryClient()

    def enabled(self) -> bool:
        return self.client.enabled()

    def store(self, req: UploadRequest) -> Optional[str]:
        folder = f"home-maintenance/{req.user_id}/{req.kind}"
        return self.client.upload(req.data, filename=req.filename, content_type=req.content_type, folder=folder).url


class DataUrlStorage:
    """Inline base64 data: URL. Always available; meant for development."""

    name = "data-url"

    def enabled(self) -> bool:
        return True

    def store(self, req: UploadRequest) -> Optional[str]:
        return f"data:{req.content_type};base64,{base64.b64encode(req.data).decode('ascii')}"


class UploadStorage:
    """Tries each enabled strategy in order; the data: URL fallback always ends the chain."""

    def __init__(self, strategies: Sequence[StorageStrategy]) -> None:
        self.strategies = list(strategies)
        self.fallback = DataUrlStorage()

    @classmethod
    def from_settings(cls) -> "UploadStorage":
        return cls([BlobStorage(), CloudinaryStorage()])

    def has_remote(self) -> bool:
        return any(s.enabled() for s in self.strategies)

    def store(self, req: UploadRequest) -> StoredFile:
        for strategy in self.strategies:
            if not strategy.enabled():
                continue
            try:
                url = strategy.store(req)
            except Exception:
                log.warning("storage backend failed: %s", strategy.name, exc_info=True, extra={"provider": strategy.name})
                continue
            if url:
                return StoredFile(url=url, storage=strategy.name)

        return StoredFile(url=self.fallback.store(req) or "", storage=self.fallback.name)
