"""AssignmentRules — per-type validation and normalization of new assignments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.errors import validation_error
from crewdesk.domain.value_objects.enums import AssignmentStatus, AssignmentType

DEFAULT_ROTATION = "14/14"


@dataclass(frozen=True)
class AssignmentDraft:
    """Caller input for a new assignment, before validation."""

    worker_id: str | None
    project_id: str | None
    position_id: str | None
    assignment_start_date: date | None = None
    assignment_end_date: date | None = None
    override_reason: str | None = None
    rotation_schedule: str | None = None
    opcon_supervisor_id: str | None = None
    notes: str | None = None


def blank_to_none(value: str | None) -> str | None:
    s = (value or "").strip()
    return s or None


def rotation_or_default(value: str | None, default: str = DEFAULT_ROTATION) -> str:
    return blank_to_none(value) or default


def validate_draft(draft: AssignmentDraft, assignment_type: AssignmentType) -> None:
    """Raise VALIDATION_ERROR naming the first missing or disallowed field.

    Order: worker, project, position, then the type-specific fields.
    """
    if not blank_to_none(draft.worker_id):
        raise validation_error("worker_id is required.")
    if not blank_to_none(draft.project_id):
        raise validation_error("project_id is required.")
    if not blank_to_none(draft.position_id):
        raise validation_error("position_id is required.")

    reason = blank_to_none(draft.override_reason)

    if assignment_type == AssignmentType.PRIMARY:
        if reason:
            raise validation_error("override_reason is not allowed for PRIMARY.")
    elif assignment_type == AssignmentType.SECONDARY:
        if not reason:
            raise validation_error("override_reason is required for SECONDARY.")
    elif assignment_type == AssignmentType.TEMP_COVERAGE:
        if draft.assignment_start_date is None:
            raise validation_error("assignment_start_date is required for TEMP_COVERAGE.")
        if draft.assignment_end_date is None:
            raise validation_error("assignment_end_date is required for TEMP_COVERAGE.")
        if not reason:
            raise validation_error("override_reason is required for TEMP_COVERAGE.")
        if draft.assignment_end_date < draft.assignment_start_date:
            raise validation_error(
                "assignment_end_date must not be before assignment_start_date."
            )


def build_assignment(
    draft: AssignmentDraft,
    assignment_type: AssignmentType,
    today: date,
    default_rotation: str = DEFAULT_ROTATION,
) -> Assignment:
    """Validate the draft and return the row to insert (id=None, active)."""
    validate_draft(draft, assignment_type)

    if assignment_type == AssignmentType.TEMP_COVERAGE:
        start_date = draft.assignment_start_date
        rotation = blank_to_none(draft.rotation_schedule)
    else:
        start_date = draft.assignment_start_date or today
        rotation = rotation_or_default(draft.rotation_schedule, default_rotation)

    override_reason = (
        None
        if assignment_type == AssignmentType.PRIMARY
        else blank_to_none(draft.override_reason)
    )

    return Assignment(
        id=None,
        worker_id=draft.worker_id.strip(),
        project_id=draft.project_id.strip(),
        position_id=draft.position_id.strip(),
        assignment_type=assignment_type,
        assignment_start_date=start_date,
        assignment_end_date=draft.assignment_end_date,
        ended_at=None,
        status=AssignmentStatus.ACTIVE,
        override_reason=override_reason,
        rotation_schedule=rotation,
        opcon_supervisor_id=blank_to_none(draft.opcon_supervisor_id),
        notes=blank_to_none(draft.notes),
    )
