"""Commit-time validation for crop rectangles."""

from __future__ import annotations

from ..config import BOUNDS_TOLERANCE, MIN_CROP_SIZE
from ..errors import FrameValidationError
from .models import CropRect


def validate_crop_rect(
    rect: CropRect,
    *,
    min_size: float = MIN_CROP_SIZE,
    tolerance: float = BOUNDS_TOLERANCE,
) -> CropRect:
    """Return *rect* unchanged or raise :class:`FrameValidationError`."""

    if not rect.is_finite():
        raise FrameValidationError(f"Crop rectangle has non-finite components: {rect}")
    if rect.width < min_size - tolerance or rect.height < min_size - tolerance:
        raise FrameValidationError(
            f"Crop rectangle {rect.width:.4f}x{rect.height:.4f} is below the "
            f"minimum size {min_size}"
        )
    if (
        rect.x < -tolerance
        or rect.y < -tolerance
        or rect.right > 1.0 + tolerance
        or rect.bottom > 1.0 + tolerance
    ):
        raise FrameValidationError(f"Crop rectangle leaves the image bounds: {rect}")
    return rect
