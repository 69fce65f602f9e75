import logging
from dataclasses import dataclass
from typing import Optional

from .base import UseCase, UseCaseRequest, UseCaseResponse
from intent.config import IMPORT_JPEG_QUALITY
from intent.domain.models import Project
from intent.domain.repositories import IProjectRepository
from intent.errors import CollaboratorError, DatabaseError
from intent.infrastructure.services.image_store import ImageStore

@dataclass(frozen=True)
class ImportPhotoRequest(UseCaseRequest):
    image_bytes: bytes = b""
    name: Optional[str] = None
    quality: float = IMPORT_JPEG_QUALITY

@dataclass(frozen=True)
class ImportPhotoResponse(UseCaseResponse):
    project_id: str = ""
    name: str = ""

class ImportPhotoUseCase(UseCase):
    """Decode a photo, store it re-encoded as JPEG and create a project for it."""

    def __init__(self, project_repo: IProjectRepository, image_store: ImageStore):
        self._project_repo = project_repo
        self._image_store = image_store
        self._logger = logging.getLogger(__name__)

    def execute(self, request: ImportPhotoRequest) -> ImportPhotoResponse:
        if not request.image_bytes:
            return ImportPhotoResponse(success=False, error="No image data to import")
        try:
            image = self._image_store.decode(request.image_bytes)
            stored = self._image_store.compress(image, quality=request.quality)
        except CollaboratorError as exc:
            self._logger.warning("Photo import failed: %s", exc)
            return ImportPhotoResponse(success=False, error=str(exc))

        project = Project.create(stored, name=request.name)
        try:
            self._project_repo.save(project)
        except DatabaseError as exc:
            self._logger.exception("Failed to store imported project")
            return ImportPhotoResponse(success=False, error=str(exc))

        self._logger.info(
            "Imported %dx%d photo as project '%s' (%s)",
            image.width(), image.height(), project.name, project.id,
        )
        return ImportPhotoResponse(project_id=project.id, name=project.name)
