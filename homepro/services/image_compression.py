# homepro/services/image_compression.py
from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError

log = logging.getLogger(__name__)

COMPRESSIBLE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


@dataclass(frozen=True)
class CompressedImage:
    data: bytes
    content_type: str
    filename: str


def _webp_name(filename: str) -> str:
    stem = re.sub(r"\.[^.]+$", "", filename or "") or "image"
    return f"{stem}.webp"


def compress_image(
    data: bytes,
    *,
    content_type: str,
    filename: str,
    max_dimension: int = 1920,
    quality: int = 85,
) -> Optional[CompressedImage]:
    """
    Fit within max_dimension (never upscaled) and re-encode as WebP.

    Returns None when the type is not compressible, decoding or encoding
    fails (oversized pixel counts included), or the result would not be
    smaller than the input.
    """
    if content_type not in COMPRESSIBLE_TYPES:
        return None

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
            img.thumbnail((max_dimension, max_dimension))

            out = io.BytesIO()
            img.save(out, format="WEBP", quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        log.warning("image compression skipped: %s", e)
        return None

    encoded = out.getvalue()
    if len(encoded) >= len(data):
        return None
    return CompressedImage(data=encoded, content_type="image/webp", filename=_webp_name(filename))
