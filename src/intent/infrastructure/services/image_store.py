"""Image decoding, cropping, compression and export for projects."""

from __future__ import annotations

import enum
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRect, QRectF, QSize, QSizeF, Qt
from PySide6.QtGui import QImage

from ...config import DEFAULT_JPEG_QUALITY, THUMBNAIL_SIZE
from ...crop.geometry import to_absolute
from ...domain.models import CropRect, Project
from ...errors import ImageCropError, ImageDecodeError, ImageEncodeError
from ...utils.image_loader import qimage_from_bytes

_LOGGER = logging.getLogger(__name__)


class ExportStatus(enum.Enum):
    SUCCESS = "success"
    DENIED = "denied"
    ERROR = "error"


class ImageStore:
    """Qt backed implementation of the image collaborator used by the services."""

    def load_original(self, project: Project) -> QImage:
        """Decode the stored original of *project*."""
        image = qimage_from_bytes(project.original_image_bytes)
        if image is None or image.isNull():
            raise ImageDecodeError(f"Cannot decode the original photo of project {project.id}")
        return image

    def decode(self, data: bytes) -> QImage:
        image = qimage_from_bytes(data)
        if image is None or image.isNull():
            raise ImageDecodeError("Unsupported or corrupt image data")
        return image

    def crop(self, image: QImage, rect: CropRect) -> QImage:
        """Return the part of *image* covered by the normalised *rect*.

        The projected rectangle is intersected with the image bounds first; an
        empty intersection raises :class:`ImageCropError`.
        """
        bounds = QRectF(0, 0, image.width(), image.height())
        pixel_rect = to_absolute(rect, QSizeF(image.width(), image.height()))
        valid = pixel_rect.intersected(bounds).toRect()
        if valid.isEmpty():
            raise ImageCropError(f"Crop {rect} does not intersect a {image.width()}x{image.height()} image")
        cropped = image.copy(valid)
        if cropped.isNull():
            raise ImageCropError(f"Qt could not copy {valid} from the image")
        return cropped

    def resize(self, image: QImage, target_size: QSize) -> Optional[QImage]:
        """Scale *image* to fit within *target_size* keeping its aspect ratio."""
        if image.isNull() or image.width() <= 0 or image.height() <= 0:
            return None
        if target_size.width() <= 0 or target_size.height() <= 0:
            return None
        return image.scaled(
            target_size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )

    def compress(
        self,
        image: QImage,
        target_size: Optional[QSize] = None,
        quality: float = DEFAULT_JPEG_QUALITY,
    ) -> bytes:
        """Encode *image* as JPEG, optionally shrinking it to *target_size* first."""
        source = image
        if target_size is not None:
            source = self.resize(image, target_size) or image
        payload = QByteArray()
        buffer = QBuffer(payload)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        try:
            ok = source.save(buffer, "JPEG", _quality_percent(quality))
        finally:
            buffer.close()
        if not ok or payload.isEmpty():
            raise ImageEncodeError("JPEG encoding failed")
        return bytes(payload.data())

    def thumbnail(self, image: QImage, size: int = THUMBNAIL_SIZE) -> Optional[QImage]:
        """Return a square thumbnail filled from the centre of *image*."""
        if image.isNull() or image.width() <= 0 or image.height() <= 0 or size <= 0:
            return None
        scaled = image.scaled(
            QSize(size, size),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        left = max(0, (scaled.width() - size) // 2)
        top = max(0, (scaled.height() - size) // 2)
        return scaled.copy(QRect(left, top, size, size))

    def export_to_library(
        self,
        image: QImage,
        directory: Path,
        quality: float = DEFAULT_JPEG_QUALITY,
    ) -> ExportStatus:
        """Write *image* as a new JPEG inside *directory*.

        ``DENIED`` is reported when the directory cannot be created or written
        to, ``ERROR`` when encoding or writing the file fails.
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            _LOGGER.warning("Export directory %s cannot be created", directory)
            return ExportStatus.DENIED
        except OSError:
            _LOGGER.exception("Failed to prepare export directory %s", directory)
            return ExportStatus.ERROR
        if not os.access(directory, os.W_OK):
            _LOGGER.warning("Export directory %s is not writable", directory)
            return ExportStatus.DENIED

        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        target = directory / f"frame-{stamp}-{uuid.uuid4().hex[:8]}.jpg"
        if image.isNull() or not image.save(str(target), "JPEG", _quality_percent(quality)):
            _LOGGER.error("Failed to write exported frame to %s", target)
            return ExportStatus.ERROR
        _LOGGER.info("Exported frame to %s", target)
        return ExportStatus.SUCCESS


def _quality_percent(quality: float) -> int:
    return int(round(max(0.0, min(1.0, float(quality))) * 100))
