"""Port interface for project position persistence."""

from abc import ABC, abstractmethod

from crewdesk.domain.entities.position import ProjectPosition


class PositionRepository(ABC):
    @abstractmethod
    async def list_by_project(self, project_id: str) -> list[ProjectPosition]:
        ...

    @abstractmethod
    async def get_by_id(self, position_id: str) -> ProjectPosition | None:
        ...

    @abstractmethod
    async def insert(self, position: ProjectPosition) -> ProjectPosition:
        ...

    @abstractmethod
    async def update(self, position_id: str, changes: dict) -> ProjectPosition | None:
        ...
