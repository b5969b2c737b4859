from __future__ import annotations
import io
import os
from PIL import Image


ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
ALLOWED_FORMATS = {"JPEG", "PNG", "GIF"}
MIME_FOR_EXT = {".jpg": "image/jpeg", ".jpeg": "image/jpeg", ".png": "image/png", ".gif": "image/gif"}

def extension_of(filename: str | None) -> str:
    return os.path.splitext(filename or "")[1].lower()

def mime_for_name(name: str) -> str:
    return MIME_FOR_EXT.get(extension_of(name), "application/octet-stream")

def sniff_format(data: bytes) -> str | None:
    # Header-only parse: Image.open does not decode pixel data
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.format if img.format in ALLOWED_FORMATS else None
    except Exception:
        return None
