"""Port interfaces for projects and the customers that own them."""

from abc import ABC, abstractmethod

from crewdesk.domain.entities.project import Project


class ProjectRepository(ABC):
    @abstractmethod
    async def get_by_id(self, project_id: str) -> Project | None:
        ...


class CustomerRepository(ABC):
    @abstractmethod
    async def get_account_manager_id(self, customer_id: str) -> str | None:
        ...

    @abstractmethod
    async def get_sub_customer_account_manager_id(self, sub_customer_id: str) -> str | None:
        ...
