import logging
from dataclasses import dataclass, field
from typing import Optional

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.config import BOUNDS_TOLERANCE, MIN_CROP_SIZE
from intent.domain.models import Frame, Project
from intent.domain.repositories import IProjectRepository
from intent.domain.validation import validate_crop_rect
from intent.errors import DatabaseError, FrameValidationError

@dataclass(frozen=True)
class AddFrameRequest(UseCaseRequest):
    project: Optional[Project] = field(default=None, compare=False)
    frame: Optional[Frame] = None

@dataclass(frozen=True)
class AddFrameResponse(UseCaseResponse):
    frame_id: str = ""
    frame_count: int = 0

class AddFrameUseCase(UseCase):
    """Append a committed frame to a project after validating its crop."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        min_size: float = MIN_CROP_SIZE,
        tolerance: float = BOUNDS_TOLERANCE,
    ):
        self._project_repo = project_repo
        self._min_size = min_size
        self._tolerance = tolerance
        self._logger = logging.getLogger(__name__)

    def execute(self, request: AddFrameRequest) -> AddFrameResponse:
        project, frame = request.project, request.frame
        if project is None or frame is None:
            return AddFrameResponse(success=False, error="A project and a frame are required")

        try:
            validate_crop_rect(frame.crop_rect, min_size=self._min_size, tolerance=self._tolerance)
        except FrameValidationError as exc:
            self._logger.warning("Dropped frame %s for project %s: %s", frame.id, project.id, exc)
            return AddFrameResponse(
                success=False, error=str(exc), frame_count=project.frame_count
            )

        if project.frame(frame.id) is not None:
            return AddFrameResponse(
                success=False,
                error=f"Frame {frame.id} already belongs to the project",
                frame_count=project.frame_count,
            )

        previous = project.frames
        project.frames = [*previous, frame]
        try:
            self._project_repo.save(project)
        except DatabaseError as exc:
            project.frames = previous
            self._logger.exception("Failed to store frame %s", frame.id)
            return AddFrameResponse(success=False, error=str(exc), frame_count=project.frame_count)

        self._logger.info("Added frame %s to project %s", frame.id, project.id)
        return AddFrameResponse(frame_id=frame.id, frame_count=project.frame_count)
