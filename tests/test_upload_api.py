# tests/test_upload_api.py
from __future__ import annotations

import io

from PIL import Image

from homepro.routers.upload import DATA_URL_MESSAGE, NO_REMOTE_WARNING
from homepro.services.image_compression import compress_image


def _png(size=(400, 300)) -> bytes:
    buf = io.BytesIO()
    # noisy pixels so the PNG is not trivially small
    img = Image.effect_noise(size, 64).convert("RGB")
    img.save(buf, format="PNG")
    return buf.getvalue()


def test_pdf_falls_back_to_data_url(client, headers):
    body = b"%PDF-1.4\n%test\n"
    r = client.post(
        "/api/upload",
        files={"file": ("receipt.pdf", body, "application/pdf")},
        data={"type": "receipt"},
        headers=headers(),
    )
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["url"].startswith("data:application/pdf;base64,")
    assert out["storage"] == "data-url"
    assert out["compressed"] is False
    assert out["size"] == out["originalSize"] == len(body)
    assert out["filename"] == "receipt.pdf"
    assert out["message"] == DATA_URL_MESSAGE
    assert out["warning"] == NO_REMOTE_WARNING


def test_png_is_recompressed_to_webp(client, headers):
    data = _png()
    r = client.post("/api/upload", files={"file": ("photo.png", data, "image/png")}, headers=headers())
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["compressed"] is True
    assert out["type"] == "image/webp"
    assert out["size"] < out["originalSize"] == len(data)
    assert out["filename"] == "photo.png"


def test_rejects_unknown_type(client, headers):
    r = client.post("/api/upload", files={"file": ("a.txt", b"hello", "text/plain")}, headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid file type. Only images (JPEG, PNG, WebP) and PDFs are allowed."}


def test_requires_file(client, headers):
    r = client.post("/api/upload", data={"type": "photo"}, headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "No file provided"}


def _huge_bilevel_png() -> bytes:
    # 196 megapixels but only a few KB on disk; Pillow refuses to decode it
    buf = io.BytesIO()
    Image.new("1", (14000, 14000)).save(buf, format="PNG")
    return buf.getvalue()


def test_oversized_pixel_count_is_stored_uncompressed(client, headers):
    data = _huge_bilevel_png()
    r = client.post("/api/upload", files={"file": ("scan.png", data, "image/png")}, headers=headers())
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["compressed"] is False
    assert out["type"] == "image/png"
    assert out["size"] == out["originalSize"] == len(data)
    assert out["url"].startswith("data:image/png;base64,")


def test_compress_image_skips_decompression_bombs():
    assert compress_image(_huge_bilevel_png(), content_type="image/png", filename="scan.png") is None
