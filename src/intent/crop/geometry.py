"""Conversions between normalised crop rectangles and pixel rectangles."""

from __future__ import annotations

import logging

from PySide6.QtCore import QRectF, QSizeF

from ..domain.models import CropRect

_LOGGER = logging.getLogger(__name__)


def _is_degenerate(container_size: QSizeF) -> bool:
    return container_size.width() <= 0 or container_size.height() <= 0


def to_absolute(rect: CropRect, container_size: QSizeF) -> QRectF:
    """Return *rect* scaled into a container of *container_size* pixels."""

    return QRectF(
        rect.x * container_size.width(),
        rect.y * container_size.height(),
        rect.width * container_size.width(),
        rect.height * container_size.height(),
    )


def from_absolute(pixel_rect: QRectF, container_size: QSizeF) -> CropRect:
    """Return *pixel_rect* as fractions of *container_size*.

    A container with a non-positive dimension cannot be normalised against, so
    the default crop rectangle is returned instead of dividing by zero.
    """

    if _is_degenerate(container_size):
        _LOGGER.debug(
            "Degenerate container %sx%s, using default crop",
            container_size.width(),
            container_size.height(),
        )
        return CropRect()
    width = container_size.width()
    height = container_size.height()
    return CropRect(
        x=pixel_rect.x() / width,
        y=pixel_rect.y() / height,
        width=pixel_rect.width() / width,
        height=pixel_rect.height() / height,
    )


def normalised_delta(dx_px: float, dy_px: float, container_size: QSizeF) -> tuple[float, float]:
    """Convert a translation in container pixels to normalised deltas.

    Returns ``(0.0, 0.0)`` for a degenerate container so a drag against a
    collapsed view leaves the rectangle untouched.
    """

    if _is_degenerate(container_size):
        return (0.0, 0.0)
    return (float(dx_px) / container_size.width(), float(dy_px) / container_size.height())
