"""
Hit testing logic for crop handles.

This module contains pure geometric functions for detecting which crop handle
(if any) is under a given point, with no dependencies on input events or UI
state.
"""

from __future__ import annotations

import math

from PySide6.QtCore import QPointF, QRectF

from ..config import HANDLE_HIT_PADDING
from .utils import CropHandle


def handle_positions(rect: QRectF) -> dict[CropHandle, QPointF]:
    """Return the control point of every handle for a crop box in pixels."""

    center_x = rect.x() + rect.width() * 0.5
    center_y = rect.y() + rect.height() * 0.5
    return {
        CropHandle.TOP_LEFT: QPointF(rect.left(), rect.top()),
        CropHandle.TOP_RIGHT: QPointF(rect.right(), rect.top()),
        CropHandle.BOTTOM_RIGHT: QPointF(rect.right(), rect.bottom()),
        CropHandle.BOTTOM_LEFT: QPointF(rect.left(), rect.bottom()),
        CropHandle.TOP: QPointF(center_x, rect.top()),
        CropHandle.RIGHT: QPointF(rect.right(), center_y),
        CropHandle.BOTTOM: QPointF(center_x, rect.bottom()),
        CropHandle.LEFT: QPointF(rect.left(), center_y),
        CropHandle.CENTER: QPointF(center_x, center_y),
    }


class HitTester:
    """Pure-function hit tester for crop box handles."""

    def __init__(self, hit_padding: float = HANDLE_HIT_PADDING) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        hit_padding:
            Distance threshold for detecting corner/edge hits, in container pixels.
        """
        self._hit_padding = float(hit_padding)

    @property
    def hit_padding(self) -> float:
        return self._hit_padding

    @staticmethod
    def _distance_to_segment(point: QPointF, start: QPointF, end: QPointF) -> float:
        """Calculate distance from point to line segment."""
        px, py = point.x(), point.y()
        ax, ay = start.x(), start.y()
        bx, by = end.x(), end.y()
        vx = bx - ax
        vy = by - ay
        if abs(vx) < 1e-6 and abs(vy) < 1e-6:
            return math.hypot(px - ax, py - ay)
        t = ((px - ax) * vx + (py - ay) * vy) / (vx * vx + vy * vy)
        t = max(0.0, min(1.0, t))
        qx = ax + t * vx
        qy = ay + t * vy
        return math.hypot(px - qx, py - qy)

    def test(self, point: QPointF, rect: QRectF) -> CropHandle:
        """Determine which crop handle (if any) is under *point*.

        Corners win over edges and edges win over the interior, so a press
        near a corner always resizes on both axes.

        Parameters
        ----------
        point:
            The point to test in container pixels.
        rect:
            The crop box in container pixels.

        Returns
        -------
        CropHandle:
            The handle that was hit, or ``CropHandle.NONE`` if no handle was hit.
        """
        positions = handle_positions(rect)
        for handle in (
            CropHandle.TOP_LEFT,
            CropHandle.TOP_RIGHT,
            CropHandle.BOTTOM_RIGHT,
            CropHandle.BOTTOM_LEFT,
        ):
            corner = positions[handle]
            if math.hypot(point.x() - corner.x(), point.y() - corner.y()) <= self._hit_padding:
                return handle

        top_left = positions[CropHandle.TOP_LEFT]
        top_right = positions[CropHandle.TOP_RIGHT]
        bottom_right = positions[CropHandle.BOTTOM_RIGHT]
        bottom_left = positions[CropHandle.BOTTOM_LEFT]
        edges = [
            (CropHandle.TOP, top_left, top_right),
            (CropHandle.RIGHT, top_right, bottom_right),
            (CropHandle.BOTTOM, bottom_left, bottom_right),
            (CropHandle.LEFT, top_left, bottom_left),
        ]
        for handle, start, end in edges:
            if self._distance_to_segment(point, start, end) <= self._hit_padding:
                return handle

        if rect.left() <= point.x() <= rect.right() and rect.top() <= point.y() <= rect.bottom():
            return CropHandle.CENTER

        return CropHandle.NONE
