"""Port interface for assignment persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from crewdesk.domain.entities.assignment import Assignment, AssignmentPatch
from crewdesk.domain.value_objects.enums import AssignmentType


class AssignmentOrder(str, Enum):
    START_DATE_DESC = "start_date_desc"
    CREATED_AT_DESC = "created_at_desc"


@dataclass(frozen=True)
class AssignmentQuery:
    worker_id: str | None = None
    project_id: str | None = None
    position_id: str | None = None
    types: frozenset[AssignmentType] | None = None
    include_ended: bool = False
    order: AssignmentOrder = AssignmentOrder.START_DATE_DESC
    offset: int | None = None
    limit: int | None = None


class AssignmentRepository(ABC):
    @abstractmethod
    async def list(self, query: AssignmentQuery) -> list[Assignment]:
        ...

    @abstractmethod
    async def count(self, query: AssignmentQuery) -> int:
        """Number of rows matching the filters; order, offset and limit are ignored."""
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        ...

    @abstractmethod
    async def insert(self, assignment: Assignment) -> Assignment:
        """Insert and return the stored row.

        Raises AppError(CONFLICT) when a uniqueness constraint rejects the row.
        """
        ...

    @abstractmethod
    async def update(self, assignment_id: str, patch: AssignmentPatch) -> Assignment | None:
        """Apply the patch and return the stored row, or None if it does not exist."""
        ...
