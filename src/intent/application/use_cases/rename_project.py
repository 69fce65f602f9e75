import logging
from dataclasses import dataclass

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.domain.repositories import IProjectRepository
from intent.errors import DatabaseError

@dataclass(frozen=True)
class RenameProjectRequest(UseCaseRequest):
    project_id: str = ""
    name: str = ""

@dataclass(frozen=True)
class RenameProjectResponse(UseCaseResponse):
    name: str = ""

class RenameProjectUseCase(UseCase):
    def __init__(self, project_repo: IProjectRepository):
        self._project_repo = project_repo
        self._logger = logging.getLogger(__name__)

    def execute(self, request: RenameProjectRequest) -> RenameProjectResponse:
        name = request.name.strip()
        if not name:
            return RenameProjectResponse(success=False, error="Project name cannot be empty")

        project = self._project_repo.get(request.project_id)
        if project is None:
            return RenameProjectResponse(success=False, error="Project not found")

        old_name = project.name
        project.name = name
        try:
            self._project_repo.save(project)
        except DatabaseError as exc:
            self._logger.exception("Failed to rename project %s", request.project_id)
            return RenameProjectResponse(success=False, error=str(exc), name=old_name)

        self._logger.info("Renamed project %s from '%s' to '%s'", project.id, old_name, name)
        return RenameProjectResponse(name=name)
