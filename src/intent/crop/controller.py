"""
Crop interaction controller.

This module acts as the coordinator of a single crop editing session: it owns
the mutable crop rectangle, turns gesture events into drag sessions through
the hit tester and feeds the drag engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QPointF, QSizeF

from ..config import HANDLE_HIT_PADDING, MIN_CROP_SIZE
from ..domain.models import AspectRatio, CropRect, Frame
from .aspect import fit_to_aspect_ratio
from .engine import DragSession, begin_drag
from .geometry import normalised_delta, to_absolute
from .hit_tester import HitTester
from .utils import CropHandle, GestureEvent, GesturePhase

_LOGGER = logging.getLogger(__name__)


class CropInteractionController:
    """Manages the in-progress crop rectangle and its drag gestures."""

    def __init__(
        self,
        *,
        container_size_provider: Callable[[], QSizeF],
        on_crop_changed: Callable[[CropRect], None] | None = None,
        on_request_update: Callable[[], None] | None = None,
        aspect_ratio: AspectRatio = AspectRatio.FREE,
        initial_rect: CropRect | None = None,
        min_size: float = MIN_CROP_SIZE,
        hit_padding: float = HANDLE_HIT_PADDING,
    ) -> None:
        """Initialize the crop interaction controller.

        Parameters
        ----------
        container_size_provider:
            Callable that returns the current pixel size of the view showing
            the image.
        on_crop_changed:
            Callback when the crop rectangle changes.
        on_request_update:
            Callback to request a repaint of the host view.
        aspect_ratio:
            Preset active when the session starts.
        initial_rect:
            Rectangle to start from, the default crop when omitted.  It is
            clamped and fitted to *aspect_ratio* about its centre.
        min_size:
            Minimum normalised width and height.
        hit_padding:
            Handle hit radius in container pixels.
        """
        self._container_size_provider = container_size_provider
        self._on_crop_changed = on_crop_changed or (lambda rect: None)
        self._on_request_update = on_request_update or (lambda: None)
        self._min_size = float(min_size)
        self._hit_tester = HitTester(hit_padding=hit_padding)

        self._aspect_ratio = aspect_ratio
        self._crop_rect = self._fitted(initial_rect or CropRect())
        self._session: DragSession | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def crop_rect(self) -> CropRect:
        return self._crop_rect

    @property
    def aspect_ratio(self) -> AspectRatio:
        return self._aspect_ratio

    @property
    def active_handle(self) -> CropHandle:
        if self._session is None:
            return CropHandle.NONE
        return self._session.active_handle

    def is_dragging(self) -> bool:
        return self._session is not None

    def set_crop_rect(self, rect: CropRect) -> None:
        """Replace the working rectangle, clamped and fitted to the active preset."""
        self._session = None
        self._set_rect(self._fitted(rect))

    def set_aspect_ratio(self, aspect_ratio: AspectRatio) -> None:
        """Switch the preset and re-fit the rectangle about its centre."""
        self._aspect_ratio = aspect_ratio
        if self._session is not None:
            _LOGGER.debug("Aspect ratio switched mid-drag, discarding the drag session")
            self._session = None
        self._set_rect(fit_to_aspect_ratio(self._crop_rect, aspect_ratio, min_size=self._min_size))

    def reset(self) -> None:
        """Start over from the default rectangle with a free ratio."""
        self._session = None
        self._aspect_ratio = AspectRatio.FREE
        self._set_rect(CropRect())

    def handle_gesture(self, event: GestureEvent) -> None:
        """Dispatch a gesture event from the input source."""
        if event.phase is GesturePhase.START:
            if event.position is None:
                _LOGGER.debug("Gesture start without a position ignored")
                return
            self.begin_drag_at(event.position)
        elif event.phase is GesturePhase.CHANGE:
            self.update_drag(event.translation)
        elif event.phase is GesturePhase.END:
            self.end_drag()

    def hit_test(self, position: QPointF) -> CropHandle:
        """Return the handle under *position* given in container pixels."""
        size = self._container_size_provider()
        if size.width() <= 0 or size.height() <= 0:
            return CropHandle.NONE
        return self._hit_tester.test(position, to_absolute(self._crop_rect, size))

    def begin_drag_at(self, position: QPointF) -> CropHandle:
        """Start a drag with the handle under *position*, if any."""
        handle = self.hit_test(position)
        if handle != CropHandle.NONE:
            self.begin_drag(handle)
        return handle

    def begin_drag(self, handle: CropHandle) -> bool:
        """Capture the current rectangle as the drag anchor for *handle*."""
        if self._session is not None:
            _LOGGER.warning(
                "Drag with %s already active, ignoring start for %s",
                self._session.active_handle.name,
                handle.name,
            )
            return False
        session = begin_drag(self._crop_rect, handle)
        if session is None:
            return False
        self._session = session
        self._on_request_update()
        return True

    def update_drag(self, translation: QPointF) -> None:
        """Apply the cumulative *translation* (container pixels) of the active drag."""
        session = self._session
        if session is None:
            return
        delta_x, delta_y = normalised_delta(
            translation.x(), translation.y(), self._container_size_provider()
        )
        self._set_rect(
            session.update(
                delta_x,
                delta_y,
                aspect_ratio=self._aspect_ratio,
                min_size=self._min_size,
            )
        )

    def end_drag(self) -> None:
        """Finish the active drag keeping the current rectangle."""
        if self._session is None:
            return
        self._session = None
        self._on_request_update()

    def cancel_drag(self) -> None:
        """Finish the active drag and restore the rectangle it started from."""
        session = self._session
        if session is None:
            return
        self._session = None
        self._set_rect(session.anchor_rect)

    def make_frame(self) -> Frame:
        """Return a frame for the current rectangle and preset."""
        return Frame(crop_rect=self._crop_rect, aspect_ratio=self._aspect_ratio)

    def commit_and_reset(self) -> Frame:
        """Return a frame for the current rectangle and prepare for another one."""
        frame = self.make_frame()
        self.reset()
        return frame

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _fitted(self, rect: CropRect) -> CropRect:
        rect = rect.clamped(self._min_size)
        if self._aspect_ratio.ratio is None:
            return rect
        return fit_to_aspect_ratio(rect, self._aspect_ratio, min_size=self._min_size)

    def _set_rect(self, rect: CropRect) -> None:
        if rect == self._crop_rect:
            return
        self._crop_rect = rect
        self._on_crop_changed(rect)
        self._on_request_update()
