import logging
from dataclasses import dataclass

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.domain.repositories import IProjectRepository
from intent.errors import DatabaseError

@dataclass(frozen=True)
class DeleteProjectRequest(UseCaseRequest):
    project_id: str = ""

@dataclass(frozen=True)
class DeleteProjectResponse(UseCaseResponse):
    pass

class DeleteProjectUseCase(UseCase):
    def __init__(self, project_repo: IProjectRepository):
        self._project_repo = project_repo
        self._logger = logging.getLogger(__name__)

    def execute(self, request: DeleteProjectRequest) -> DeleteProjectResponse:
        project = self._project_repo.get(request.project_id)
        if project is None:
            return DeleteProjectResponse(success=False, error="Project not found")

        try:
            self._project_repo.delete(request.project_id)
        except DatabaseError as exc:
            self._logger.exception("Failed to delete project %s", request.project_id)
            return DeleteProjectResponse(success=False, error=str(exc))
        self._logger.info(f"Deleted project {request.project_id} with {project.frame_count} frames")
        return DeleteProjectResponse(success=True)
