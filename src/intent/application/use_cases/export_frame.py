import logging
from dataclasses import dataclass
from pathlib import Path

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.config import DEFAULT_JPEG_QUALITY
from intent.domain.repositories import IProjectRepository
from intent.errors import CollaboratorError
from intent.infrastructure.services.image_store import ExportStatus, ImageStore

@dataclass(frozen=True)
class ExportFrameRequest(UseCaseRequest):
    project_id: str = ""
    frame_id: str = ""
    destination: Path = Path(".")
    quality: float = DEFAULT_JPEG_QUALITY

@dataclass(frozen=True)
class ExportFrameResponse(UseCaseResponse):
    status: ExportStatus = ExportStatus.ERROR
    width: int = 0
    height: int = 0

class ExportFrameUseCase(UseCase):
    """Crop one frame out of the original photo and write it to a directory."""

    def __init__(self, project_repo: IProjectRepository, image_store: ImageStore):
        self._project_repo = project_repo
        self._image_store = image_store
        self._logger = logging.getLogger(__name__)

    def execute(self, request: ExportFrameRequest) -> ExportFrameResponse:
        project = self._project_repo.get(request.project_id)
        if project is None:
            return ExportFrameResponse(success=False, error="Project not found")
        frame = project.frame(request.frame_id)
        if frame is None:
            return ExportFrameResponse(success=False, error="Frame not found")

        try:
            original = self._image_store.load_original(project)
            cropped = self._image_store.crop(original, frame.crop_rect)
        except CollaboratorError as exc:
            self._logger.exception("Could not crop frame %s", frame.id)
            return ExportFrameResponse(success=False, error=str(exc))

        status = self._image_store.export_to_library(
            cropped, request.destination, quality=request.quality
        )
        if status is not ExportStatus.SUCCESS:
            return ExportFrameResponse(
                success=False,
                error=f"Export to {request.destination} {status.value}",
                status=status,
            )
        return ExportFrameResponse(
            status=status,
            width=cropped.width(),
            height=cropped.height(),
        )
