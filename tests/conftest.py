"""Pytest configuration, in-memory fakes and shared fixtures."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from crewdesk.application.ports.assignment_repo import (
    AssignmentOrder,
    AssignmentQuery,
    AssignmentRepository,
)
from crewdesk.application.ports.audit_recorder import AuditRecorder
from crewdesk.application.ports.position_repo import PositionRepository
from crewdesk.application.ports.project_repo import CustomerRepository, ProjectRepository
from crewdesk.application.use_cases.write_assignment import AssignmentWriter
from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.entities.audit_entry import AuditEntry
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.errors import AppError, ErrorCode
from crewdesk.domain.value_objects.enums import AssignmentStatus, AssignmentType

EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self):
        self.rows: dict[str, Assignment] = {}
        self.insert_error: AppError | None = None
        self._seq = 0

    def seed(self, assignment: Assignment) -> Assignment:
        self._seq += 1
        stored = replace(
            assignment,
            id=assignment.id or f"a-{self._seq}",
            created_at=assignment.created_at or EPOCH + timedelta(seconds=self._seq),
        )
        self.rows[stored.id] = stored
        return replace(stored)

    async def list(self, query: AssignmentQuery) -> list[Assignment]:
        rows = self._matching(query)

        if query.order == AssignmentOrder.CREATED_AT_DESC:
            rows.sort(key=lambda r: r.created_at, reverse=True)
        else:
            rows.sort(key=lambda r: (r.assignment_start_date, r.created_at), reverse=True)

        start = query.offset or 0
        end = start + query.limit if query.limit is not None else None
        return [replace(r) for r in rows[start:end]]

    async def count(self, query: AssignmentQuery) -> int:
        return len(self._matching(query))

    def _matching(self, query: AssignmentQuery) -> list[Assignment]:
        rows = list(self.rows.values())
        if not query.include_ended:
            rows = [r for r in rows if r.ended_at is None]
        if query.worker_id:
            rows = [r for r in rows if r.worker_id == query.worker_id]
        if query.project_id:
            rows = [r for r in rows if r.project_id == query.project_id]
        if query.position_id:
            rows = [r for r in rows if r.position_id == query.position_id]
        if query.types:
            rows = [r for r in rows if r.assignment_type in query.types]
        return rows

    async def get_by_id(self, assignment_id):
        row = self.rows.get(assignment_id)
        return replace(row) if row else None

    async def insert(self, assignment):
        if self.insert_error is not None:
            raise self.insert_error
        return self.seed(replace(assignment, id=None, created_at=None))

    async def update(self, assignment_id, patch):
        row = self.rows.get(assignment_id)
        if row is None:
            return None
        row.ended_at = patch.ended_at
        row.status = patch.status
        return replace(row)


class FakeAuditRecorder(AuditRecorder):
    def __init__(self, fail: bool = False):
        self.entries: list[AuditEntry] = []
        self.fail = fail

    async def record(self, entry):
        if self.fail:
            raise AppError(ErrorCode.DB_ERROR, "audit_logs is unavailable")
        entry.id = f"audit-{len(self.entries) + 1}"
        self.entries.append(entry)
        return entry.id


class FakePositionRepo(PositionRepository):
    def __init__(self, positions: list[ProjectPosition] | None = None):
        self.rows: dict[str, ProjectPosition] = {p.id: p for p in positions or []}

    async def list_by_project(self, project_id):
        return sorted(
            (replace(p) for p in self.rows.values() if p.project_id == project_id),
            key=lambda p: p.name,
        )

    async def get_by_id(self, position_id):
        row = self.rows.get(position_id)
        return replace(row) if row else None

    async def insert(self, position):
        stored = replace(position, id=f"pos-{len(self.rows) + 1}")
        self.rows[stored.id] = stored
        return replace(stored)

    async def update(self, position_id, changes):
        row = self.rows.get(position_id)
        if row is None:
            return None
        for key, value in changes.items():
            setattr(row, key, value)
        return replace(row)


class FakeProjectRepo(ProjectRepository):
    def __init__(self, projects=None):
        self._projects = {p.id: p for p in projects or []}

    async def get_by_id(self, project_id):
        return self._projects.get(project_id)


class FakeCustomerRepo(CustomerRepository):
    def __init__(self, customer_managers=None, sub_customer_managers=None):
        self._customers = customer_managers or {}
        self._sub_customers = sub_customer_managers or {}

    async def get_account_manager_id(self, customer_id):
        return self._customers.get(customer_id)

    async def get_sub_customer_account_manager_id(self, sub_customer_id):
        return self._sub_customers.get(sub_customer_id)


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def make_assignment():
    def _make(
        worker_id="W1",
        project_id="PR1",
        position_id="P1",
        assignment_type=AssignmentType.PRIMARY,
        start=date(2026, 1, 5),
        ended_at=None,
        **extra,
    ) -> Assignment:
        return Assignment(
            id=extra.pop("id", None),
            worker_id=worker_id,
            project_id=project_id,
            position_id=position_id,
            assignment_type=assignment_type,
            assignment_start_date=start,
            ended_at=ended_at,
            status=AssignmentStatus.ACTIVE if ended_at is None else AssignmentStatus.COMPLETED,
            override_reason=(
                None if assignment_type == AssignmentType.PRIMARY else "seeded overlap"
            ),
            rotation_schedule="14/14",
            **extra,
        )

    return _make


@pytest.fixture
def assignment_repo():
    return FakeAssignmentRepo()


@pytest.fixture
def audit():
    return FakeAuditRecorder()


@pytest.fixture
def writer(assignment_repo, audit):
    return AssignmentWriter(assignment_repo=assignment_repo, audit=audit)
