import logging
from dataclasses import dataclass, field
from typing import Optional

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.config import MIN_CROP_SIZE
from intent.domain.models import Project
from intent.domain.repositories import IProjectRepository
from intent.errors import DatabaseError

@dataclass(frozen=True)
class UpdateProjectRequest(UseCaseRequest):
    project: Optional[Project] = field(default=None, compare=False)

@dataclass(frozen=True)
class UpdateProjectResponse(UseCaseResponse):
    frame_count: int = 0

class UpdateProjectUseCase(UseCase):
    """Replace the stored copy of a project wholesale."""

    def __init__(self, project_repo: IProjectRepository, min_size: float = MIN_CROP_SIZE):
        self._project_repo = project_repo
        self._min_size = min_size
        self._logger = logging.getLogger(__name__)

    def execute(self, request: UpdateProjectRequest) -> UpdateProjectResponse:
        project = request.project
        if project is None:
            return UpdateProjectResponse(success=False, error="A project is required")

        invalid = [frame.id for frame in project.frames if not frame.crop_rect.is_valid(self._min_size)]
        if invalid:
            self._logger.warning("Refusing to store project %s with invalid frames %s", project.id, invalid)
            return UpdateProjectResponse(
                success=False,
                error=f"Invalid crop on frames: {', '.join(invalid)}",
                frame_count=project.frame_count,
            )

        try:
            self._project_repo.save(project)
        except DatabaseError as exc:
            self._logger.exception("Failed to update project %s", project.id)
            return UpdateProjectResponse(success=False, error=str(exc), frame_count=project.frame_count)
        return UpdateProjectResponse(frame_count=project.frame_count)
