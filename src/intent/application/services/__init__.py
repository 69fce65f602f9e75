from .frame_collection import FrameCollectionManager
from .project_service import ProjectService
