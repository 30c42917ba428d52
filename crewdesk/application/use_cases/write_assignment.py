"""AssignmentWriter — create and end assignments, with audit side effects."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone

from crewdesk.application.ports.assignment_repo import AssignmentRepository
from crewdesk.application.ports.audit_recorder import AuditRecorder
from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.application.use_cases.resolve_assignment_type import AssignmentTypeResolver
from crewdesk.domain.entities.assignment import Assignment, AssignmentPatch
from crewdesk.domain.entities.audit_entry import AuditEntry
from crewdesk.domain.errors import AppError, conflict, not_found, validation_error
from crewdesk.domain.policies.assignment_rules import (
    DEFAULT_ROTATION,
    AssignmentDraft,
    blank_to_none,
    build_assignment,
)
from crewdesk.domain.value_objects.enums import (
    END_STATUSES,
    AssignmentStatus,
    AssignmentType,
    AuditAction,
)

logger = logging.getLogger(__name__)

ENTITY_TYPE = "assignment"


@dataclass(frozen=True)
class ChangedEntity:
    entity_type: str
    entity_id: str


@dataclass
class AssignmentChange:
    """Authoritative row after a write, plus what callers should refresh."""

    assignment: Assignment
    changed: frozenset[ChangedEntity] = field(default_factory=frozenset)
    audit_warning: str | None = None


def _changed_entities(a: Assignment) -> frozenset[ChangedEntity]:
    return frozenset(
        {
            ChangedEntity("assignment", a.id),
            ChangedEntity("worker", a.worker_id),
            ChangedEntity("project", a.project_id),
            ChangedEntity("position", a.position_id),
        }
    )


class AssignmentWriter:
    """Validates per type and performs the create / end transitions."""

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        audit: AuditRecorder,
        default_rotation: str = DEFAULT_ROTATION,
    ):
        self._assignments = assignment_repo
        self._audit = audit
        self._checker = ConflictChecker(assignment_repo)
        self._resolver = AssignmentTypeResolver(self._checker)
        self._default_rotation = default_rotation

    async def assign(
        self, draft: AssignmentDraft, requested_as_primary: bool = True
    ) -> AssignmentChange:
        """Resolve PRIMARY vs SECONDARY for the worker, then create the row."""
        resolution = await self._resolver.resolve(draft.worker_id, requested_as_primary)
        if resolution.assignment_type == AssignmentType.PRIMARY and draft.override_reason:
            # A reason typed in anticipation of an override has no meaning on PRIMARY
            draft = replace(draft, override_reason=None)
        return await self.create(draft, resolution.assignment_type)

    async def create(
        self, draft: AssignmentDraft, assignment_type: AssignmentType
    ) -> AssignmentChange:
        if assignment_type == AssignmentType.TEMP_COVERAGE:
            return await self.start_temp_coverage(draft)

        row = build_assignment(draft, assignment_type, date.today(), self._default_rotation)
        await self._preflight_incumbent(row)
        return await self._insert(row)

    async def start_temp_coverage(self, draft: AssignmentDraft) -> AssignmentChange:
        """Create TEMP_COVERAGE; overlapping an incumbent is expected, not rejected."""
        row = build_assignment(
            draft, AssignmentType.TEMP_COVERAGE, date.today(), self._default_rotation
        )
        incumbent = await self._checker.find_active_incumbent_for_position(row.position_id)
        if incumbent is not None:
            logger.info(
                "Temp coverage on position %s overlaps incumbent assignment %s",
                row.position_id, incumbent.id,
            )
        return await self._insert(row)

    async def end(
        self,
        assignment_id: str | None,
        end_status: AssignmentStatus = AssignmentStatus.COMPLETED,
        ended_at: datetime | None = None,
    ) -> AssignmentChange:
        """Set ended_at/status on an assignment. History is never deleted."""
        assignment_id = blank_to_none(assignment_id)
        if assignment_id is None:
            raise validation_error("assignment_id is required.")
        try:
            end_status = AssignmentStatus(end_status)
        except ValueError:
            end_status = None
        if end_status not in END_STATUSES:
            raise validation_error("end_status must be 'completed' or 'cancelled'.")

        before = await self._assignments.get_by_id(assignment_id)
        if before is None:
            raise not_found(f"Assignment {assignment_id} not found.")
        if not before.is_active():
            logger.warning(
                "Assignment %s already ended at %s (%s); overwriting with %s",
                assignment_id, before.ended_at, before.status.value, end_status.value,
            )

        patch = AssignmentPatch(
            ended_at=ended_at or datetime.now(timezone.utc),
            status=end_status,
        )
        after = await self._assignments.update(assignment_id, patch)
        if after is None:
            raise not_found(f"Assignment {assignment_id} not found.")

        logger.info("Assignment %s ended: status=%s", assignment_id, end_status.value)

        action = (
            AuditAction.CANCEL
            if end_status == AssignmentStatus.CANCELLED
            else AuditAction.COMPLETE
        )
        warning = await self._record_audit(
            AuditEntry(
                entity_type=ENTITY_TYPE,
                entity_id=assignment_id,
                action=action,
                old_value=before.snapshot(),
                new_value=after.snapshot(),
            )
        )
        return AssignmentChange(after, _changed_entities(after), warning)

    async def _preflight_incumbent(self, row: Assignment) -> None:
        """Friendly CONFLICT before the store's unique indexes would reject the row."""
        if row.assignment_type == AssignmentType.PRIMARY:
            existing = await self._checker.find_active_primary(row.worker_id)
            if existing is not None:
                logger.warning(
                    "Worker %s already has active PRIMARY %s", row.worker_id, existing.id
                )
                raise conflict(
                    "Worker is already assigned as PRIMARY. "
                    "Provide an override reason to assign as SECONDARY.",
                    {"assignment_id": existing.id},
                )

        incumbent = await self._checker.find_active_incumbent_for_position(row.position_id)
        if incumbent is not None:
            logger.warning(
                "Position %s already has active incumbent %s", row.position_id, incumbent.id
            )
            raise conflict(
                "Position is already assigned to another worker.",
                {"assignment_id": incumbent.id},
            )

    async def _insert(self, row: Assignment) -> AssignmentChange:
        stored = await self._assignments.insert(row)
        logger.info(
            "Assignment %s created: worker=%s position=%s type=%s",
            stored.id, stored.worker_id, stored.position_id, stored.assignment_type.value,
        )
        warning = await self._record_audit(
            AuditEntry(
                entity_type=ENTITY_TYPE,
                entity_id=stored.id,
                action=AuditAction.ASSIGN,
                new_value=stored.snapshot(),
            )
        )
        return AssignmentChange(stored, _changed_entities(stored), warning)

    async def _record_audit(self, entry: AuditEntry) -> str | None:
        """Append to the audit log; a failure is reported, not raised."""
        try:
            await self._audit.record(entry)
        except AppError as e:
            logger.warning(
                "Audit write failed for %s %s (%s): %s",
                entry.entity_type, entry.entity_id, entry.action.value, e.message,
            )
            return f"Change saved, but the audit log entry was not recorded: {e.message}"
        return None
