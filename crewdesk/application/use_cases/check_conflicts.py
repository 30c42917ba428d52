"""ConflictChecker — look up active incumbents before an assignment is written."""

from __future__ import annotations

from crewdesk.application.ports.assignment_repo import (
    AssignmentOrder,
    AssignmentQuery,
    AssignmentRepository,
)
from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.policies.assignment_rules import blank_to_none
from crewdesk.domain.value_objects.enums import INCUMBENT_TYPES, AssignmentType


class ConflictChecker:
    """Read-only queries over the active assignment set."""

    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def find_active_primary(self, worker_id: str | None) -> Assignment | None:
        """Newest active PRIMARY for the worker, or None."""
        worker_id = blank_to_none(worker_id)
        if worker_id is None:
            return None
        return await self._first(
            AssignmentQuery(
                worker_id=worker_id,
                types=frozenset({AssignmentType.PRIMARY}),
                include_ended=False,
                order=AssignmentOrder.CREATED_AT_DESC,
                limit=1,
            )
        )

    async def find_active_incumbent_for_position(
        self, position_id: str | None
    ) -> Assignment | None:
        """Newest active PRIMARY or SECONDARY on the position, or None."""
        position_id = blank_to_none(position_id)
        if position_id is None:
            return None
        return await self._first(
            AssignmentQuery(
                position_id=position_id,
                types=INCUMBENT_TYPES,
                include_ended=False,
                order=AssignmentOrder.CREATED_AT_DESC,
                limit=1,
            )
        )

    async def _first(self, query: AssignmentQuery) -> Assignment | None:
        rows = await self._assignments.list(query)
        return rows[0] if rows else None
