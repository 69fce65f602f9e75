"""Helpers for decoding Qt images with a Pillow fallback."""

from __future__ import annotations

from io import BytesIO
from typing import Optional
import logging

from PIL import Image, ImageOps, UnidentifiedImageError
from PySide6.QtGui import QImage

_LOGGER = logging.getLogger(__name__)


def qimage_from_bytes(data: bytes) -> Optional[QImage]:
    """Return a :class:`QImage` decoded from encoded image *data*."""

    if not data:
        return None
    image = QImage()
    if image.loadFromData(data):
        return image
    for fmt in ("JPEG", "JPG", "PNG"):
        if image.loadFromData(data, fmt):
            return image
    return qimage_from_pillow(data)


def qimage_from_pillow(data: bytes) -> Optional[QImage]:
    """Decode *data* with Pillow, for formats the Qt plugins cannot read."""

    try:
        with Image.open(BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            rgba = img.convert("RGBA")
            width, height = rgba.size
            raw = rgba.tobytes("raw", "RGBA")
    except (UnidentifiedImageError, OSError, ValueError):
        _LOGGER.exception("Pillow failed to decode image bytes in qimage_from_pillow")
        return None
    # ``QImage`` does not own *raw*; copy before the buffer goes away
    return QImage(raw, width, height, width * 4, QImage.Format.Format_RGBA8888).copy()
