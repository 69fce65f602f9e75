from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from ..config import BOUNDS_TOLERANCE, DEFAULT_CROP_RECT, DEFAULT_PROJECT_NAME, MIN_CROP_SIZE


class AspectRatio(str, Enum):
    FREE = "Free"
    FOUR_THREE = "4:3"
    SIXTEEN_NINE = "16:9"
    ONE_ONE = "1:1"
    THREE_TWO = "3:2"

    @property
    def ratio(self) -> Optional[float]:
        """Width divided by height, or ``None`` when the crop is unconstrained."""
        return _RATIOS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: str | None) -> AspectRatio:
        """Return the member stored as *value*; unknown values raise ``ValueError``."""
        if value is None:
            return cls.FREE
        for member in cls:
            if member.value == value or member.name == value.upper():
                return member
        raise ValueError(f"Unknown aspect ratio: {value!r}")


_RATIOS = {
    AspectRatio.FREE: None,
    AspectRatio.FOUR_THREE: 4.0 / 3.0,
    AspectRatio.SIXTEEN_NINE: 16.0 / 9.0,
    AspectRatio.ONE_ONE: 1.0,
    AspectRatio.THREE_TWO: 3.0 / 2.0,
}

_DESCRIPTIONS = {
    AspectRatio.FREE: "Free",
    AspectRatio.FOUR_THREE: "4:3 (Default)",
    AspectRatio.SIXTEEN_NINE: "16:9 (Cinematic)",
    AspectRatio.ONE_ONE: "1:1 (Square)",
    AspectRatio.THREE_TWO: "3:2 (Classic)",
}


@dataclass(frozen=True)
class CropRect:
    """Crop region stored as fractions of the original image size."""

    x: float = DEFAULT_CROP_RECT[0]
    y: float = DEFAULT_CROP_RECT[1]
    width: float = DEFAULT_CROP_RECT[2]
    height: float = DEFAULT_CROP_RECT[3]

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width * 0.5, self.y + self.height * 0.5)

    @property
    def area(self) -> float:
        return self.width * self.height

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    def is_valid(
        self,
        min_size: float = MIN_CROP_SIZE,
        tolerance: float = BOUNDS_TOLERANCE,
    ) -> bool:
        """Return True when the rectangle sits inside the unit square with room to spare."""
        if not self.is_finite():
            return False
        return (
            self.x >= -tolerance
            and self.y >= -tolerance
            and self.right <= 1.0 + tolerance
            and self.bottom <= 1.0 + tolerance
            and self.width >= min_size - tolerance
            and self.height >= min_size - tolerance
        )

    def clamped(self, min_size: float = MIN_CROP_SIZE) -> CropRect:
        """Return the closest rectangle that satisfies the bounds and ``min_size``."""
        width = max(min_size, min(1.0, self.width))
        height = max(min_size, min(1.0, self.height))
        x = max(0.0, min(1.0 - width, self.x))
        y = max(0.0, min(1.0 - height, self.y))
        return CropRect(x, y, width, height)

    def translated(self, dx: float, dy: float) -> CropRect:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Frame:
    """A committed crop region of a project's original photo."""

    crop_rect: CropRect
    aspect_ratio: AspectRatio = AspectRatio.FREE
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class Project:
    id: str
    name: str
    original_image_bytes: bytes
    created_at: datetime = field(default_factory=datetime.now)
    # Insertion order is display order
    frames: List[Frame] = field(default_factory=list)

    @classmethod
    def create(cls, image_bytes: bytes, name: Optional[str] = None) -> Project:
        return cls(
            id=str(uuid.uuid4()),
            name=name or DEFAULT_PROJECT_NAME,
            original_image_bytes=image_bytes,
            created_at=datetime.now(),
        )

    def frame(self, frame_id: str) -> Optional[Frame]:
        for frame in self.frames:
            if frame.id == frame_id:
                return frame
        return None

    @property
    def frame_count(self) -> int:
        return len(self.frames)
