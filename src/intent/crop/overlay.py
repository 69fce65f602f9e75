"""
Overlay painting for committed frames and the in-progress crop box.

Both overlays are painted into a separate transparent layer: the layer is
filled with a translucent dark colour and every crop rectangle is then
cleared out of it.  Clearing on the host canvas directly would also erase the
photo underneath, so hosts composite the returned layer on top of the image.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from PySide6.QtCore import QLineF, QPointF, QRectF, QSize, QSizeF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from ..config import (
    ACTIVE_HANDLE_SCALE,
    EDITOR_OVERLAY_OPACITY,
    FRAME_BORDER_WIDTH,
    FRAME_OVERLAY_OPACITY,
    GRID_LINE_OPACITY,
    GRID_LINE_WIDTH,
    HANDLE_SIZE,
)
from ..domain.models import CropRect, Frame
from .geometry import to_absolute
from .hit_tester import handle_positions
from .utils import CropHandle


_CORNER_HANDLES = (
    CropHandle.TOP_LEFT,
    CropHandle.TOP_RIGHT,
    CropHandle.BOTTOM_RIGHT,
    CropHandle.BOTTOM_LEFT,
)


@dataclass(frozen=True)
class OverlayRegion:
    """Projected, tappable pixel rectangle of one frame."""

    frame_id: str
    rect: QRectF


def rule_of_thirds_lines(rect: QRectF) -> list[QLineF]:
    """Return the two vertical and two horizontal thirds lines of *rect*."""

    left, top = rect.left(), rect.top()
    right, bottom = rect.right(), rect.bottom()
    third_w = rect.width() / 3.0
    third_h = rect.height() / 3.0
    return [
        QLineF(left + third_w, top, left + third_w, bottom),
        QLineF(left + 2 * third_w, top, left + 2 * third_w, bottom),
        QLineF(left, top + third_h, right, top + third_h),
        QLineF(left, top + 2 * third_h, right, top + 2 * third_h),
    ]


def _layer_for(container_size: QSizeF) -> QImage | None:
    if container_size.width() <= 0 or container_size.height() <= 0:
        return None
    size = QSize(math.ceil(container_size.width()), math.ceil(container_size.height()))
    layer = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
    layer.fill(Qt.GlobalColor.transparent)
    return layer


def _dark(opacity: float) -> QColor:
    color = QColor(Qt.GlobalColor.black)
    color.setAlphaF(max(0.0, min(1.0, float(opacity))))
    return color


class FrameOverlayRenderer:
    """Projects a project's frames onto a view and resolves taps on them."""

    def __init__(
        self,
        *,
        on_frame_tap: Callable[[str], None] | None = None,
        opacity: float = FRAME_OVERLAY_OPACITY,
        border_color: QColor | None = None,
        border_width: float = FRAME_BORDER_WIDTH,
    ) -> None:
        self._on_frame_tap = on_frame_tap
        self._mask_color = _dark(opacity)
        self._border_color = border_color or QColor(Qt.GlobalColor.white)
        self._border_width = float(border_width)

    def regions(self, frames: Sequence[Frame], container_size: QSizeF) -> list[OverlayRegion]:
        """Return one region per frame, in drawing order."""
        if container_size.width() <= 0 or container_size.height() <= 0:
            return []
        return [
            OverlayRegion(frame_id=frame.id, rect=to_absolute(frame.crop_rect, container_size))
            for frame in frames
        ]

    def frame_at(
        self, frames: Sequence[Frame], container_size: QSizeF, point: QPointF
    ) -> str | None:
        """Return the id of the topmost frame containing *point*.

        Frames are drawn in list order, so on overlap the last one wins.
        """
        for region in reversed(self.regions(frames, container_size)):
            if region.rect.contains(point):
                return region.frame_id
        return None

    def handle_tap(
        self, frames: Sequence[Frame], container_size: QSizeF, point: QPointF
    ) -> str | None:
        """Resolve a discrete tap and notify ``on_frame_tap`` once when it hits a frame."""
        frame_id = self.frame_at(frames, container_size, point)
        if frame_id is not None and self._on_frame_tap is not None:
            self._on_frame_tap(frame_id)
        return frame_id

    def render(self, frames: Sequence[Frame], container_size: QSizeF) -> QImage:
        """Return a transparent layer with the dark mask and every frame cut out.

        Rendering has no side effects and can run on every paint.
        """
        layer = _layer_for(container_size)
        if layer is None:
            return QImage()
        regions = self.regions(frames, container_size)
        painter = QPainter(layer)
        try:
            painter.fillRect(QRectF(0, 0, layer.width(), layer.height()), self._mask_color)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
            for region in regions:
                painter.fillRect(region.rect, Qt.GlobalColor.transparent)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)
            if self._border_width > 0:
                pen = QPen(self._border_color)
                pen.setWidthF(self._border_width)
                painter.setPen(pen)
                painter.setBrush(Qt.BrushStyle.NoBrush)
                for region in regions:
                    painter.drawRect(region.rect)
        finally:
            painter.end()
        return layer

    def paint(self, painter: QPainter, frames: Sequence[Frame], container_size: QSizeF) -> None:
        """Composite the overlay layer onto *painter* at the origin."""
        layer = self.render(frames, container_size)
        if not layer.isNull():
            painter.drawImage(QPointF(0, 0), layer)


class CropEditorOverlay:
    """Paints the crop box being edited: mask, border, grid and corner handles."""

    def __init__(
        self,
        *,
        opacity: float = EDITOR_OVERLAY_OPACITY,
        handle_size: float = HANDLE_SIZE,
        border_width: float = FRAME_BORDER_WIDTH,
    ) -> None:
        self._mask_color = _dark(opacity)
        self._handle_size = float(handle_size)
        self._border_width = float(border_width)

    def handle_diameter(self, handle: CropHandle, active_handle: CropHandle) -> float:
        if handle == active_handle:
            return self._handle_size * ACTIVE_HANDLE_SCALE
        return self._handle_size

    def render(
        self,
        crop_rect: CropRect,
        container_size: QSizeF,
        *,
        active_handle: CropHandle = CropHandle.NONE,
        show_grid: bool = False,
    ) -> QImage:
        layer = _layer_for(container_size)
        if layer is None:
            return QImage()
        rect = to_absolute(crop_rect, container_size)
        painter = QPainter(layer)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.fillRect(QRectF(0, 0, layer.width(), layer.height()), self._mask_color)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
            painter.fillRect(rect, Qt.GlobalColor.transparent)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

            if show_grid:
                grid_color = QColor(Qt.GlobalColor.white)
                grid_color.setAlphaF(GRID_LINE_OPACITY)
                grid_pen = QPen(grid_color)
                grid_pen.setWidthF(GRID_LINE_WIDTH)
                painter.setPen(grid_pen)
                painter.drawLines(rule_of_thirds_lines(rect))

            border_pen = QPen(QColor(Qt.GlobalColor.white))
            border_pen.setWidthF(self._border_width)
            painter.setPen(border_pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(rect)

            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(Qt.GlobalColor.white))
            positions = handle_positions(rect)
            for handle in _CORNER_HANDLES:
                radius = self.handle_diameter(handle, active_handle) * 0.5
                painter.drawEllipse(positions[handle], radius, radius)
        finally:
            painter.end()
        return layer
