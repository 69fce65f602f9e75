"""
Handle-drag rules for the crop rectangle.

Every update is computed from the rectangle captured when the drag started
(the *anchor*), never from the previous intermediate result, so the outcome
of a drag only depends on its total translation.  All per-handle geometry is
kept in :func:`apply_handle_drag` so the clamping rules can be read in one
place.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import MIN_CROP_SIZE
from ..domain.models import AspectRatio, CropRect
from .aspect import constrain
from .utils import CropHandle


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


@dataclass(frozen=True)
class DragSession:
    """State of an in-progress drag: the handle and the rectangle at drag start."""

    anchor_rect: CropRect
    active_handle: CropHandle

    def update(
        self,
        delta_x: float,
        delta_y: float,
        *,
        aspect_ratio: AspectRatio | float | None = None,
        min_size: float = MIN_CROP_SIZE,
    ) -> CropRect:
        """Return the rectangle for a cumulative normalised drag of ``(delta_x, delta_y)``."""
        return apply_handle_drag(
            self.anchor_rect,
            self.active_handle,
            delta_x,
            delta_y,
            aspect_ratio=aspect_ratio,
            min_size=min_size,
        )


def begin_drag(rect: CropRect, handle: CropHandle) -> DragSession | None:
    """Return a new session anchored at *rect*, or ``None`` for :attr:`CropHandle.NONE`."""

    if handle == CropHandle.NONE:
        return None
    return DragSession(anchor_rect=rect, active_handle=handle)


def apply_handle_drag(
    anchor: CropRect,
    handle: CropHandle,
    delta_x: float,
    delta_y: float,
    *,
    aspect_ratio: AspectRatio | float | None = None,
    min_size: float = MIN_CROP_SIZE,
) -> CropRect:
    """Apply a drag of *handle* by normalised deltas to *anchor*.

    Parameters
    ----------
    anchor:
        Rectangle captured when the drag started.
    handle:
        The handle being dragged.
    delta_x, delta_y:
        Cumulative translation since the drag started, as fractions of the
        container width and height.
    aspect_ratio:
        Optional ratio to enforce after the handle update.
    min_size:
        Minimum width and height of the result.

    Returns
    -------
    CropRect:
        The updated rectangle.  It always lies within the unit square and is
        at least ``min_size`` on both axes.
    """

    if handle == CropHandle.NONE:
        return anchor

    x, y, width, height = anchor.as_tuple()
    right = anchor.right
    bottom = anchor.bottom

    if handle == CropHandle.CENTER:
        # A pure translate: the size is never touched, even under a ratio
        dx = _clamp(anchor.x + delta_x, 0.0, 1.0 - anchor.width) - anchor.x
        dy = _clamp(anchor.y + delta_y, 0.0, 1.0 - anchor.height) - anchor.y
        return anchor.translated(dx, dy)

    # The moving coordinate is clamped once and the size is recovered from
    # it, so origin and size can never disagree.
    if handle.moves_left:
        x = _clamp(anchor.x + delta_x, 0.0, right - min_size)
        width = right - x
    elif handle.moves_right:
        width = _clamp(anchor.width + delta_x, min_size, 1.0 - anchor.x)

    if handle.moves_top:
        y = _clamp(anchor.y + delta_y, 0.0, bottom - min_size)
        height = bottom - y
    elif handle.moves_bottom:
        height = _clamp(anchor.height + delta_y, min_size, 1.0 - anchor.y)

    rect = CropRect(x, y, width, height)
    return _apply_anchored_ratio(rect, handle, aspect_ratio, min_size)


def _apply_anchored_ratio(
    rect: CropRect,
    handle: CropHandle,
    aspect_ratio: AspectRatio | float | None,
    min_size: float,
) -> CropRect:
    """Enforce *aspect_ratio* keeping the side opposite to *handle* fixed.

    Min-size and the image bounds take precedence over the ratio: a result
    that would be too small is grown back to ``min_size`` along the ratio and
    then clamped to the space left from the fixed side, which may leave the
    ratio slightly off for rectangles squeezed into a corner.
    """

    if not (handle.is_edge or handle.is_corner):
        return rect
    ratio = aspect_ratio.ratio if isinstance(aspect_ratio, AspectRatio) else aspect_ratio
    if ratio is None or ratio <= 0 or rect.width <= 0 or rect.height <= 0:
        return rect

    keep_right = handle.moves_left
    keep_bottom = handle.moves_top
    right = rect.right
    bottom = rect.bottom
    available_width = right if keep_right else 1.0 - rect.x
    available_height = bottom if keep_bottom else 1.0 - rect.y

    width, height = rect.width, rect.height
    if handle.is_edge and (handle.moves_left or handle.moves_right):
        # The dragged width drives, the height follows
        height = width / ratio
        if height > available_height:
            height = available_height
            width = height * ratio
    elif handle.is_edge:
        width = height * ratio
        if width > available_width:
            width = available_width
            height = width / ratio
    else:
        constrained = constrain(rect, ratio)
        width, height = constrained.width, constrained.height

    if width < min_size:
        width = min_size
        height = width / ratio
    if height < min_size:
        height = min_size
        width = height * ratio
    width = min(width, available_width)
    height = min(height, available_height)

    x = right - width if keep_right else rect.x
    y = bottom - height if keep_bottom else rect.y
    return CropRect(x, y, width, height)
