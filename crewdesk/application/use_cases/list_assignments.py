"""AssignmentQueries — filtered, paginated listing of assignments."""

from __future__ import annotations

from dataclasses import dataclass

from crewdesk.application.ports.assignment_repo import (
    AssignmentOrder,
    AssignmentQuery,
    AssignmentRepository,
)
from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.policies.assignment_rules import blank_to_none
from crewdesk.domain.policies.pagination import to_window
from crewdesk.domain.value_objects.enums import AssignmentType


@dataclass(frozen=True)
class ListAssignmentsParams:
    worker_id: str | None = None
    project_id: str | None = None
    position_id: str | None = None
    assignment_type: AssignmentType | None = None
    include_ended: bool = False
    page: int | None = None
    page_size: int | None = None


class AssignmentQueries:
    """Active = ended_at IS NULL; include_ended=True returns full history."""

    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def list(self, params: ListAssignmentsParams | None = None) -> list[Assignment]:
        params = params or ListAssignmentsParams()

        offset = limit = None
        # Pagination only applies when the caller asks for a page
        if params.page is not None or params.page_size is not None:
            window = to_window(params.page, params.page_size)
            offset, limit = window.offset, window.limit

        return await self._assignments.list(self._query(params, offset, limit))

    async def count(self, params: ListAssignmentsParams | None = None) -> int:
        """Size of the whole filtered set, regardless of page."""
        return await self._assignments.count(self._query(params or ListAssignmentsParams()))

    @staticmethod
    def _query(
        params: ListAssignmentsParams, offset: int | None = None, limit: int | None = None
    ) -> AssignmentQuery:
        return AssignmentQuery(
            worker_id=blank_to_none(params.worker_id),
            project_id=blank_to_none(params.project_id),
            position_id=blank_to_none(params.position_id),
            types=frozenset({params.assignment_type}) if params.assignment_type else None,
            include_ended=params.include_ended,
            order=AssignmentOrder.START_DATE_DESC,
            offset=offset,
            limit=limit,
        )

    async def by_worker(self, worker_id: str, include_ended: bool = False) -> list[Assignment]:
        return await self.list(
            ListAssignmentsParams(worker_id=worker_id, include_ended=include_ended)
        )

    async def by_project(self, project_id: str, include_ended: bool = False) -> list[Assignment]:
        return await self.list(
            ListAssignmentsParams(project_id=project_id, include_ended=include_ended)
        )

    async def by_position(
        self, position_id: str, include_ended: bool = False
    ) -> list[Assignment]:
        return await self.list(
            ListAssignmentsParams(position_id=position_id, include_ended=include_ended)
        )
