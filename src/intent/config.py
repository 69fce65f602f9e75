"""Default configuration values for Intent."""

from __future__ import annotations

from typing import Final

# Crop rectangles are stored as fractions of the reference image.  The
# minimum edge length applies independently to each axis, so ``0.1`` means
# 10% of the image width horizontally and 10% of its height vertically.
MIN_CROP_SIZE: Final[float] = 0.1

# ``(x, y, width, height)`` of the rectangle a new crop session starts with
# and the fallback returned when a pixel rectangle cannot be normalised.
DEFAULT_CROP_RECT: Final[tuple[float, float, float, float]] = (0.1, 0.1, 0.8, 0.8)

# Slack allowed when checking ``x + width <= 1`` style bounds.  Edge anchored
# updates compute ``x = right - width`` which can overshoot by a few ULPs.
BOUNDS_TOLERANCE: Final[float] = 1e-6

# ---------------------------------------------------------------------------
# Interaction constants
# ---------------------------------------------------------------------------

HANDLE_SIZE: Final[float] = 24.0
HANDLE_HIT_PADDING: Final[float] = HANDLE_SIZE * 0.5
ACTIVE_HANDLE_SCALE: Final[float] = 1.2

# Opacity of the dark mask painted over the committed frames view and over
# the area outside the crop rectangle while editing.
FRAME_OVERLAY_OPACITY: Final[float] = 0.5
EDITOR_OVERLAY_OPACITY: Final[float] = 0.6
FRAME_BORDER_WIDTH: Final[float] = 2.0
GRID_LINE_WIDTH: Final[float] = 1.0
GRID_LINE_OPACITY: Final[float] = 0.7

# ---------------------------------------------------------------------------
# Image handling
# ---------------------------------------------------------------------------

IMPORT_JPEG_QUALITY: Final[float] = 0.7
DEFAULT_JPEG_QUALITY: Final[float] = 0.8
THUMBNAIL_SIZE: Final[int] = 200
DEFAULT_PROJECT_NAME: Final[str] = "Untitled Project"

# Number of worker threads used for import/export jobs.
IMAGE_WORKERS: Final[int] = 2

DATABASE_FILE_NAME: Final[str] = "projects.db"
EXPORT_DIR_NAME: Final[str] = "exported"
