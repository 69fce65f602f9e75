import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

from PySide6.QtGui import QImage

from intent.application.use_cases.delete_project import (
    DeleteProjectRequest, DeleteProjectResponse, DeleteProjectUseCase,
)
from intent.application.use_cases.export_frame import (
    ExportFrameRequest, ExportFrameResponse, ExportFrameUseCase,
)
from intent.application.use_cases.import_photo import (
    ImportPhotoRequest, ImportPhotoResponse, ImportPhotoUseCase,
)
from intent.application.use_cases.rename_project import (
    RenameProjectRequest, RenameProjectResponse, RenameProjectUseCase,
)
from intent.config import DEFAULT_JPEG_QUALITY, IMAGE_WORKERS, THUMBNAIL_SIZE
from intent.domain.models import Frame, Project
from intent.domain.repositories import IProjectRepository
from intent.errors import FrameNotFoundError, ImageEncodeError, ProjectNotFoundError
from intent.infrastructure.services.image_store import ImageStore


class ProjectService:
    """
    Application Service Facade for project level operations.

    Imports and exports are also offered as futures running on a small
    thread pool so that callers on a UI loop never block on image work.
    """
    def __init__(
        self,
        project_repo: IProjectRepository,
        image_store: ImageStore,
        import_photo_use_case: ImportPhotoUseCase,
        rename_project_use_case: RenameProjectUseCase,
        delete_project_use_case: DeleteProjectUseCase,
        export_frame_use_case: ExportFrameUseCase,
        *,
        export_directory: Path,
        jpeg_quality: float = DEFAULT_JPEG_QUALITY,
        max_workers: int = IMAGE_WORKERS,
    ):
        self._project_repo = project_repo
        self._image_store = image_store
        self._import_uc = import_photo_use_case
        self._rename_uc = rename_project_use_case
        self._delete_uc = delete_project_use_case
        self._export_uc = export_frame_use_case
        self._export_directory = export_directory
        self._jpeg_quality = jpeg_quality
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers), thread_name_prefix="intent-image"
        )
        self._logger = logging.getLogger(__name__)

    @property
    def export_directory(self) -> Path:
        return self._export_directory

    # Import ----------------------------------------------------------------

    def import_photo(self, image_bytes: bytes, name: Optional[str] = None) -> ImportPhotoResponse:
        return self._import_uc.execute(ImportPhotoRequest(image_bytes=image_bytes, name=name))

    def import_photo_async(
        self, image_bytes: bytes, name: Optional[str] = None
    ) -> "Future[ImportPhotoResponse]":
        return self._executor.submit(self.import_photo, image_bytes, name)

    def import_file(self, path: Path, name: Optional[str] = None) -> ImportPhotoResponse:
        """Import the photo stored at *path*, named after the file by default."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            self._logger.warning("Cannot read %s: %s", path, exc)
            return ImportPhotoResponse(success=False, error=f"Cannot read {path}: {exc}")
        return self.import_photo(data, name=name or Path(path).stem)

    # Projects --------------------------------------------------------------

    def list_projects(self) -> List[Project]:
        return self._project_repo.list_all()

    def get_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project not found: {project_id}")
        return project

    def rename_project(self, project_id: str, name: str) -> RenameProjectResponse:
        return self._rename_uc.execute(RenameProjectRequest(project_id=project_id, name=name))

    def delete_project(self, project_id: str) -> DeleteProjectResponse:
        return self._delete_uc.execute(DeleteProjectRequest(project_id=project_id))

    # Frames ----------------------------------------------------------------

    def crop_frame(self, project_id: str, frame_id: str) -> QImage:
        """Return the pixels of one frame cut from the project's original photo."""
        project, frame = self._locate(project_id, frame_id)
        original = self._image_store.load_original(project)
        return self._image_store.crop(original, frame.crop_rect)

    def frame_thumbnail(self, project_id: str, frame_id: str, size: int = THUMBNAIL_SIZE) -> QImage:
        cropped = self.crop_frame(project_id, frame_id)
        thumbnail = self._image_store.thumbnail(cropped, size)
        if thumbnail is None:
            raise ImageEncodeError(f"Cannot build a {size}px thumbnail for frame {frame_id}")
        return thumbnail

    def export_frame(
        self, project_id: str, frame_id: str, destination: Optional[Path] = None
    ) -> ExportFrameResponse:
        return self._export_uc.execute(
            ExportFrameRequest(
                project_id=project_id,
                frame_id=frame_id,
                destination=Path(destination) if destination else self._export_directory,
                quality=self._jpeg_quality,
            )
        )

    def export_frame_async(
        self, project_id: str, frame_id: str, destination: Optional[Path] = None
    ) -> "Future[ExportFrameResponse]":
        return self._executor.submit(self.export_frame, project_id, frame_id, destination)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _locate(self, project_id: str, frame_id: str) -> Tuple[Project, Frame]:
        project = self.get_project(project_id)
        frame = project.frame(frame_id)
        if frame is None:
            raise FrameNotFoundError(f"Frame {frame_id} not found in project {project_id}")
        return project, frame
