"""
Crop handle enumeration and gesture event types.

This module contains the plain data types shared by the drag engine, the hit
tester and the interaction controller, without any painting or I/O.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from PySide6.QtCore import QPointF


class CropHandle(enum.IntEnum):
    """Enumeration of crop box interaction handles."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    BOTTOM = 3
    TOP = 4
    TOP_LEFT = 5
    TOP_RIGHT = 6
    BOTTOM_RIGHT = 7
    BOTTOM_LEFT = 8
    CENTER = -1

    @property
    def is_corner(self) -> bool:
        return self in _CORNERS

    @property
    def is_edge(self) -> bool:
        return self in _EDGES

    @property
    def moves_left(self) -> bool:
        return self in (CropHandle.LEFT, CropHandle.TOP_LEFT, CropHandle.BOTTOM_LEFT)

    @property
    def moves_right(self) -> bool:
        return self in (CropHandle.RIGHT, CropHandle.TOP_RIGHT, CropHandle.BOTTOM_RIGHT)

    @property
    def moves_top(self) -> bool:
        return self in (CropHandle.TOP, CropHandle.TOP_LEFT, CropHandle.TOP_RIGHT)

    @property
    def moves_bottom(self) -> bool:
        return self in (CropHandle.BOTTOM, CropHandle.BOTTOM_LEFT, CropHandle.BOTTOM_RIGHT)


_CORNERS = frozenset(
    (CropHandle.TOP_LEFT, CropHandle.TOP_RIGHT, CropHandle.BOTTOM_RIGHT, CropHandle.BOTTOM_LEFT)
)
_EDGES = frozenset((CropHandle.LEFT, CropHandle.RIGHT, CropHandle.TOP, CropHandle.BOTTOM))


class GesturePhase(enum.Enum):
    START = "start"
    CHANGE = "change"
    END = "end"


@dataclass(frozen=True)
class GestureEvent:
    """A single pointer event from the gesture source.

    ``translation`` is the cumulative offset since the gesture started, in
    container pixels.  ``position`` is the pointer location when the gesture
    started and is only consulted for :attr:`GesturePhase.START`.
    """

    phase: GesturePhase
    translation: QPointF = field(default_factory=QPointF)
    position: QPointF | None = None
