"""Aspect-ratio constraints for crop rectangles."""

from __future__ import annotations

from dataclasses import replace

from ..config import MIN_CROP_SIZE
from ..domain.models import AspectRatio, CropRect


def _ratio_value(ratio: AspectRatio | float | None) -> float | None:
    if isinstance(ratio, AspectRatio):
        return ratio.ratio
    if ratio is None:
        return None
    value = float(ratio)
    return value if value > 0 else None


def constrain(rect: CropRect, ratio: AspectRatio | float | None) -> CropRect:
    """Shrink one dimension of *rect* so that ``width / height == ratio``.

    The origin is kept.  When the rectangle is wider than the target the
    width is reduced, otherwise the height is.  ``None`` or
    :attr:`AspectRatio.FREE` leaves the rectangle unchanged.
    """

    target = _ratio_value(ratio)
    if target is None or rect.width <= 0 or rect.height <= 0:
        return rect
    if rect.width / rect.height > target:
        return replace(rect, width=rect.height * target)
    return replace(rect, height=rect.width / target)


def fit_to_aspect_ratio(
    rect: CropRect,
    ratio: AspectRatio | float | None,
    *,
    min_size: float = MIN_CROP_SIZE,
) -> CropRect:
    """Re-fit *rect* to *ratio* about its centre.

    This is the one-shot adjustment applied when the user picks another
    preset, as opposed to :func:`constrain` which runs on every drag update
    anchored at the dragged handle's opposite side.
    """

    target = _ratio_value(ratio)
    if target is None or rect.width <= 0 or rect.height <= 0:
        return rect

    center_x, center_y = rect.center
    new_width, new_height = rect.width, rect.height
    if rect.width / rect.height > target:
        new_width = rect.height * target
    else:
        new_height = rect.width / target

    # Never let the centred rectangle cross an image border
    new_width = min(new_width, center_x * 2.0, (1.0 - center_x) * 2.0, 1.0)
    new_height = min(new_height, center_y * 2.0, (1.0 - center_y) * 2.0, 1.0)
    if new_width <= 0 or new_height <= 0:
        return rect

    if new_width / new_height > target:
        new_width = new_height * target
    else:
        new_height = new_width / target

    x = center_x - new_width * 0.5
    y = center_y - new_height * 0.5
    if new_width >= min_size and new_height >= min_size:
        return CropRect(x, y, new_width, new_height)

    # A rectangle hugging a border under a wide ratio cannot keep its centre
    # and the minimum size at once; keep the size and slide it back inside.
    if new_width < min_size:
        new_width = min_size
        new_height = new_width / target
    if new_height < min_size:
        new_height = min_size
        new_width = new_height * target
    new_width = min(new_width, 1.0)
    new_height = min(new_height, 1.0)
    x = max(0.0, min(1.0 - new_width, center_x - new_width * 0.5))
    y = max(0.0, min(1.0 - new_height, center_y - new_height * 0.5))
    return CropRect(x, y, new_width, new_height)
