# homepro/clients/cloudinary.py
from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from ..config import settings
from .blob_store import StoredObject

API_BASE = "https://api.cloudinary.com/v1_1"


@dataclass(frozen=True)
class CloudinaryCredentials:
    cloud_name: str
    api_key: Optional[str]
    api_secret: Optional[str]

    @classmethod
    def parse(cls, url: Optional[str]) -> Optional["CloudinaryCredentials"]:
        """cloudinary://<key>:<secret>@<cloud_name>"""
        if not url:
            return None
        u = urlparse(url.strip())
        if u.scheme != "cloudinary" or not u.hostname:
            return None
        return cls(cloud_name=u.hostname, api_key=u.username or None, api_secret=u.password or None)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    # sorted key=value pairs joined by '&', secret appended, sha1
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """
    Uploads via the Cloudinary REST API. An upload preset means an unsigned
    upload; otherwise the request is signed with the key/secret from the URL.
    """

    name = "cloudinary"

    def __init__(self, *, cloudinary_url: Optional[str] = None, upload_preset: Optional[str] = None) -> None:
        self.creds = CloudinaryCredentials.parse(cloudinary_url if cloudinary_url is not None else settings.cloudinary_url)
        self.upload_preset = upload_preset if upload_preset is not None else settings.cloudinary_upload_preset

    def enabled(self) -> bool:
        if self.creds is None:
            return False
        return bool(self.upload_preset or (self.creds.api_key and self.creds.api_secret))

    def upload(self, data: bytes, *, filename: str, content_type: str, folder: str) -> StoredObject:
        if not self.enabled() or self.creds is None:
            return StoredObject(None, {"error": "cloudinary not configured"})

        form: dict[str, Any] = {"folder": folder}
        if self.upload_preset:
            form["upload_preset"] = self.upload_preset
        else:
            form["timestamp"] = int(time.time())
            form["signature"] = sign_params(form, self.creds.api_secret or "")
            form["api_key"] = self.creds.api_key

        url = f"{API_BASE}/{self.creds.cloud_name}/auto/upload"
        with httpx.Client(timeout=60.0) as client:
            r = client.post(url, data=form, files={"file": (filename, data, content_type)})
            r.raise_for_status()
            body = r.json()

        return StoredObject(url=(body or {}).get("secure_url"), raw=body or {})
