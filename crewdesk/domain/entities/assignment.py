"""Assignment entity — one worker attached to one project position over time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from crewdesk.domain.value_objects.enums import (
    INCUMBENT_TYPES,
    AssignmentStatus,
    AssignmentType,
)


@dataclass
class Assignment:
    id: str | None
    worker_id: str
    project_id: str
    position_id: str
    assignment_type: AssignmentType
    assignment_start_date: date
    assignment_end_date: date | None = None
    ended_at: datetime | None = None
    status: AssignmentStatus = AssignmentStatus.ACTIVE
    override_reason: str | None = None
    rotation_schedule: str | None = None
    opcon_supervisor_id: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    def is_active(self) -> bool:
        # status is a legacy mirror; ended_at is the source of truth
        return self.ended_at is None

    def is_incumbent(self) -> bool:
        return self.assignment_type in INCUMBENT_TYPES

    def snapshot(self) -> dict:
        """JSON-safe view of the row, used for audit old/new values."""
        return {
            "id": self.id,
            "worker_id": self.worker_id,
            "project_id": self.project_id,
            "position_id": self.position_id,
            "assignment_type": self.assignment_type.value,
            "assignment_start_date": self.assignment_start_date.isoformat(),
            "assignment_end_date": (
                self.assignment_end_date.isoformat() if self.assignment_end_date else None
            ),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "status": self.status.value,
            "override_reason": self.override_reason,
            "rotation_schedule": self.rotation_schedule,
            "opcon_supervisor_id": self.opcon_supervisor_id,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AssignmentPatch:
    """Columns the writer is allowed to change on an existing row."""

    ended_at: datetime
    status: AssignmentStatus
