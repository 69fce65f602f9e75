from .base import UseCase, UseCaseRequest, UseCaseResponse
from .import_photo import ImportPhotoUseCase, ImportPhotoRequest, ImportPhotoResponse
from .add_frame import AddFrameUseCase, AddFrameRequest, AddFrameResponse
from .remove_frame import RemoveFrameUseCase, RemoveFrameRequest, RemoveFrameResponse
from .update_project import UpdateProjectUseCase, UpdateProjectRequest, UpdateProjectResponse
from .rename_project import RenameProjectUseCase, RenameProjectRequest, RenameProjectResponse
from .delete_project import DeleteProjectUseCase, DeleteProjectRequest, DeleteProjectResponse
from .export_frame import ExportFrameUseCase, ExportFrameRequest, ExportFrameResponse
