"""Application-wide context wiring settings, storage and services together."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .application.services.frame_collection import FrameCollectionManager
from .application.services.project_service import ProjectService
from .application.use_cases import (
    AddFrameUseCase,
    DeleteProjectUseCase,
    ExportFrameUseCase,
    ImportPhotoUseCase,
    RemoveFrameUseCase,
    RenameProjectUseCase,
    UpdateProjectUseCase,
)
from .config import MIN_CROP_SIZE
from .infrastructure.db.pool import ConnectionPool
from .infrastructure.repositories.sqlite_project_repository import SQLiteProjectRepository
from .infrastructure.services.image_store import ImageStore
from .settings.manager import SettingsManager


def _create_settings_manager() -> SettingsManager:
    manager = SettingsManager()
    manager.load()
    return manager


@dataclass
class AppContext:
    """Container object shared by the CLI and any GUI host."""

    settings: SettingsManager = field(default_factory=_create_settings_manager)
    image_store: ImageStore = field(default_factory=ImageStore)
    pool: ConnectionPool = field(init=False)
    repository: SQLiteProjectRepository = field(init=False)
    frames: FrameCollectionManager = field(init=False)
    projects: ProjectService = field(init=False)

    def __post_init__(self) -> None:
        db_path = self.settings.database_path()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.pool = ConnectionPool(db_path)
        self.repository = SQLiteProjectRepository(self.pool, min_size=MIN_CROP_SIZE)

        self.frames = FrameCollectionManager(
            AddFrameUseCase(self.repository),
            RemoveFrameUseCase(self.repository),
            UpdateProjectUseCase(self.repository),
        )
        self.projects = ProjectService(
            self.repository,
            self.image_store,
            ImportPhotoUseCase(self.repository, self.image_store),
            RenameProjectUseCase(self.repository),
            DeleteProjectUseCase(self.repository),
            ExportFrameUseCase(self.repository, self.image_store),
            export_directory=self.settings.export_directory(),
            jpeg_quality=float(self.settings.get("editor.jpeg_quality")),
        )

    def close(self) -> None:
        """Stop background workers and close database connections."""

        self.projects.shutdown()
        self.pool.close_all()


def create_context(settings_path: Optional[Path] = None) -> AppContext:
    """Load settings from *settings_path* (or the platform default) and build a context."""

    settings = SettingsManager(settings_path)
    settings.load()
    return AppContext(settings=settings)
