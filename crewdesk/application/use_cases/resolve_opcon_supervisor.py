"""ResolveOpconSupervisorUseCase — who holds operational control on a project."""

from __future__ import annotations

from crewdesk.application.ports.project_repo import CustomerRepository, ProjectRepository
from crewdesk.domain.errors import not_found
from crewdesk.domain.policies.assignment_rules import blank_to_none


class ResolveOpconSupervisorUseCase:
    """Priority: sub-customer account manager → customer account manager → None."""

    def __init__(self, project_repo: ProjectRepository, customer_repo: CustomerRepository):
        self._projects = project_repo
        self._customers = customer_repo

    async def execute(self, project_id: str | None) -> str | None:
        project_id = blank_to_none(project_id)
        if project_id is None:
            return None

        project = await self._projects.get_by_id(project_id)
        if project is None:
            raise not_found(f"Project {project_id} not found.")

        if project.sub_customer_id:
            manager_id = await self._customers.get_sub_customer_account_manager_id(
                project.sub_customer_id
            )
            if manager_id:
                return manager_id

        if project.customer_id:
            manager_id = await self._customers.get_account_manager_id(project.customer_id)
            if manager_id:
                return manager_id

        return None
