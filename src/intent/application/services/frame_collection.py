import logging

from intent.application.use_cases.add_frame import (
    AddFrameRequest, AddFrameResponse, AddFrameUseCase,
)
from intent.application.use_cases.remove_frame import (
    RemoveFrameRequest, RemoveFrameResponse, RemoveFrameUseCase,
)
from intent.application.use_cases.update_project import (
    UpdateProjectRequest, UpdateProjectResponse, UpdateProjectUseCase,
)
from intent.domain.models import Frame, Project


class FrameCollectionManager:
    """
    Application Service Facade for the ordered frames of a project.
    Every operation is synchronous and persists the project before returning.
    """
    def __init__(
        self,
        add_frame_use_case: AddFrameUseCase,
        remove_frame_use_case: RemoveFrameUseCase,
        update_project_use_case: UpdateProjectUseCase,
    ):
        self._add_uc = add_frame_use_case
        self._remove_uc = remove_frame_use_case
        self._update_uc = update_project_use_case
        self._logger = logging.getLogger(__name__)

    def add(self, project: Project, frame: Frame) -> AddFrameResponse:
        """Append *frame*; an invalid crop is dropped and reported, never stored."""
        return self._add_uc.execute(AddFrameRequest(project=project, frame=frame))

    def remove(self, project: Project, frame_id: str) -> RemoveFrameResponse:
        return self._remove_uc.execute(RemoveFrameRequest(project=project, frame_id=frame_id))

    def update(self, project: Project) -> UpdateProjectResponse:
        return self._update_uc.execute(UpdateProjectRequest(project=project))
