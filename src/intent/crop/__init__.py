"""
Crop interaction package.

This package provides the crop rectangle geometry, the handle-drag engine,
handle hit testing, the interaction controller and the overlay painters.
"""

from .aspect import constrain, fit_to_aspect_ratio
from .controller import CropInteractionController
from .engine import DragSession, apply_handle_drag, begin_drag
from .geometry import from_absolute, normalised_delta, to_absolute
from .hit_tester import HitTester, handle_positions
from .overlay import CropEditorOverlay, FrameOverlayRenderer, OverlayRegion, rule_of_thirds_lines
from .utils import CropHandle, GestureEvent, GesturePhase

__all__ = [
    "CropEditorOverlay",
    "CropHandle",
    "CropInteractionController",
    "DragSession",
    "FrameOverlayRenderer",
    "GestureEvent",
    "GesturePhase",
    "HitTester",
    "OverlayRegion",
    "apply_handle_drag",
    "begin_drag",
    "constrain",
    "fit_to_aspect_ratio",
    "from_absolute",
    "handle_positions",
    "normalised_delta",
    "rule_of_thirds_lines",
    "to_absolute",
]
