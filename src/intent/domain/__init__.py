"""Domain model for projects, frames and crop rectangles."""

from .models import AspectRatio, CropRect, Frame, Project
from .repositories import IProjectRepository
from .validation import validate_crop_rect

__all__ = ["AspectRatio", "CropRect", "Frame", "IProjectRepository", "Project", "validate_crop_rect"]
