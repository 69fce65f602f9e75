import logging
from dataclasses import dataclass, field
from typing import Optional

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.domain.models import Project
from intent.domain.repositories import IProjectRepository
from intent.errors import DatabaseError

@dataclass(frozen=True)
class RemoveFrameRequest(UseCaseRequest):
    project: Optional[Project] = field(default=None, compare=False)
    frame_id: str = ""

@dataclass(frozen=True)
class RemoveFrameResponse(UseCaseResponse):
    removed: bool = False
    frame_count: int = 0

class RemoveFrameUseCase(UseCase):
    def __init__(self, project_repo: IProjectRepository):
        self._project_repo = project_repo
        self._logger = logging.getLogger(__name__)

    def execute(self, request: RemoveFrameRequest) -> RemoveFrameResponse:
        project = request.project
        if project is None:
            return RemoveFrameResponse(success=False, error="A project is required")

        remaining = [frame for frame in project.frames if frame.id != request.frame_id]
        if len(remaining) == project.frame_count:
            # Removing an unknown frame is a no-op
            self._logger.debug("Frame %s not in project %s", request.frame_id, project.id)
            return RemoveFrameResponse(removed=False, frame_count=project.frame_count)

        previous = project.frames
        project.frames = remaining
        try:
            self._project_repo.save(project)
        except DatabaseError as exc:
            project.frames = previous
            self._logger.exception("Failed to remove frame %s", request.frame_id)
            return RemoveFrameResponse(success=False, error=str(exc), frame_count=project.frame_count)

        self._logger.info("Removed frame %s from project %s", request.frame_id, project.id)
        return RemoveFrameResponse(removed=True, frame_count=project.frame_count)
