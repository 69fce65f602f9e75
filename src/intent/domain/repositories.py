from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Project


class IProjectRepository(ABC):
    @abstractmethod
    def get(self, id: str) -> Optional[Project]:
        """Find single project by ID, frames included"""
        pass

    @abstractmethod
    def list_all(self) -> List[Project]:
        """All projects, newest first"""
        pass

    @abstractmethod
    def save(self, project: Project) -> None:
        """Insert or replace the project and its whole frame list"""
        pass

    @abstractmethod
    def delete(self, id: str) -> None:
        """Delete project by ID; its frames go with it"""
        pass
