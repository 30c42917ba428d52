"""Assignment endpoints — listing, conflict lookups, create and end."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.adapters.persistence.database import get_session
from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.application.use_cases.list_assignments import (
    AssignmentQueries,
    ListAssignmentsParams,
)
from crewdesk.application.use_cases.resolve_assignment_type import AssignmentTypeResolver
from crewdesk.application.use_cases.write_assignment import AssignmentChange, AssignmentWriter
from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.policies.assignment_rules import AssignmentDraft
from crewdesk.domain.value_objects.enums import AssignmentStatus, AssignmentType
from crewdesk.infrastructure.api.dependencies import (
    get_assignment_queries,
    get_assignment_writer,
    get_conflict_checker,
    get_type_resolver,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])

# ── Request schemas ─────────────────────────────────────────────────
# Required ids are optional here so the core reports which one is missing.


class _DraftFields(BaseModel):
    worker_id: str | None = None
    project_id: str | None = None
    position_id: str | None = None
    assignment_start_date: date | None = None
    assignment_end_date: date | None = None
    override_reason: str | None = None
    rotation_schedule: str | None = None
    opcon_supervisor_id: str | None = None
    notes: str | None = None

    def to_draft(self) -> AssignmentDraft:
        return AssignmentDraft(**self.model_dump(exclude={"requested_type"}))


class AssignRequest(_DraftFields):
    requested_type: Literal["PRIMARY", "SECONDARY"] = "PRIMARY"


class TempCoverageRequest(_DraftFields):
    pass


class EndAssignmentRequest(BaseModel):
    end_status: Literal["completed", "cancelled"] = "completed"
    ended_at: datetime | None = None


# ── Endpoints ───────────────────────────────────────────────────────


@router.get("")
async def list_assignments(
    worker_id: str | None = None,
    project_id: str | None = None,
    position_id: str | None = None,
    type: AssignmentType | None = None,
    include_ended: bool = False,
    page: int | None = Query(default=None),
    page_size: int | None = Query(default=None),
    queries: AssignmentQueries = Depends(get_assignment_queries),
):
    """List assignments; active only unless include_ended=true.

    ``total`` counts the whole filtered set, not just the returned page.
    """
    params = ListAssignmentsParams(
        worker_id=worker_id,
        project_id=project_id,
        position_id=position_id,
        assignment_type=type,
        include_ended=include_ended,
        page=page,
        page_size=page_size,
    )
    items = await queries.list(params)
    return {
        "total": await queries.count(params),
        "assignments": [_serialize_assignment(a) for a in items],
    }


@router.get("/active-primary")
async def get_active_primary(
    worker_id: str,
    checker: ConflictChecker = Depends(get_conflict_checker),
):
    """The worker's active PRIMARY assignment, or null."""
    found = await checker.find_active_primary(worker_id)
    return {"assignment": _serialize_assignment(found) if found else None}


@router.get("/active-incumbent")
async def get_active_incumbent(
    position_id: str,
    checker: ConflictChecker = Depends(get_conflict_checker),
):
    """The position's active PRIMARY/SECONDARY assignment, or null."""
    found = await checker.find_active_incumbent_for_position(position_id)
    return {"assignment": _serialize_assignment(found) if found else None}


@router.get("/resolve-type")
async def resolve_type(
    worker_id: str,
    requested_as_primary: bool = True,
    resolver: AssignmentTypeResolver = Depends(get_type_resolver),
):
    """Preview which type a new incumbent assignment would get."""
    resolution = await resolver.resolve(worker_id, requested_as_primary)
    return {
        "assignment_type": resolution.assignment_type.value,
        "requires_override": resolution.requires_override,
        "conflicting_assignment": (
            _serialize_assignment(resolution.conflicting) if resolution.conflicting else None
        ),
    }


@router.post("", status_code=201)
async def assign_worker(
    body: AssignRequest,
    writer: AssignmentWriter = Depends(get_assignment_writer),
    session: AsyncSession = Depends(get_session),
):
    """Create an incumbent assignment, downgrading to SECONDARY on conflict."""
    change = await writer.assign(
        body.to_draft(), requested_as_primary=body.requested_type == "PRIMARY"
    )
    await session.commit()
    return _serialize_change(change)


@router.post("/temp-coverage", status_code=201)
async def start_temp_coverage(
    body: TempCoverageRequest,
    writer: AssignmentWriter = Depends(get_assignment_writer),
    session: AsyncSession = Depends(get_session),
):
    """Create a TEMP_COVERAGE assignment (may overlap an incumbent)."""
    change = await writer.start_temp_coverage(body.to_draft())
    await session.commit()
    return _serialize_change(change)


@router.post("/{assignment_id}/end")
async def end_assignment(
    assignment_id: str,
    body: EndAssignmentRequest | None = None,
    writer: AssignmentWriter = Depends(get_assignment_writer),
    session: AsyncSession = Depends(get_session),
):
    """Complete or cancel an assignment. The row is kept for history."""
    body = body or EndAssignmentRequest()
    change = await writer.end(
        assignment_id,
        end_status=AssignmentStatus(body.end_status),
        ended_at=body.ended_at,
    )
    await session.commit()
    return _serialize_change(change)


def _serialize_assignment(a: Assignment) -> dict:
    data = a.snapshot()
    data["is_active"] = a.is_active()
    data["created_at"] = a.created_at.isoformat() if a.created_at else None
    return data


def _serialize_change(change: AssignmentChange) -> dict:
    return {
        "assignment": _serialize_assignment(change.assignment),
        "changed": sorted(
            ({"entity_type": c.entity_type, "entity_id": c.entity_id} for c in change.changed),
            key=lambda c: (c["entity_type"], c["entity_id"]),
        ),
        "audit_warning": change.audit_warning,
    }
