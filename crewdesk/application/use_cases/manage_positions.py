"""ManagePositionsUseCase — add / update / deactivate positions on a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from crewdesk.application.ports.audit_recorder import AuditRecorder
from crewdesk.application.ports.position_repo import PositionRepository
from crewdesk.domain.entities.audit_entry import AuditEntry
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.errors import AppError, not_found, validation_error
from crewdesk.domain.policies.assignment_rules import DEFAULT_ROTATION, blank_to_none
from crewdesk.domain.value_objects.enums import AuditAction, PositionStatus
from crewdesk.domain.value_objects.position_actions import (
    AddPosition,
    DeactivatePosition,
    PositionAction,
    UpdatePosition,
)

logger = logging.getLogger(__name__)

ENTITY_TYPE = "project_position"


@dataclass
class PositionChange:
    """Stored position after an action, plus any audit failure to surface."""

    position: ProjectPosition
    audit_warning: str | None = None


class ManagePositionsUseCase:
    """Positions are never hard-deleted; DEACTIVATE flips status to inactive."""

    def __init__(
        self,
        position_repo: PositionRepository,
        audit: AuditRecorder,
        default_rotation: str = DEFAULT_ROTATION,
    ):
        self._positions = position_repo
        self._audit = audit
        self._default_rotation = default_rotation

    async def list(self, project_id: str | None) -> list[ProjectPosition]:
        project_id = blank_to_none(project_id)
        if project_id is None:
            raise validation_error("project_id is required.")
        return await self._positions.list_by_project(project_id)

    async def execute(self, project_id: str | None, action: PositionAction) -> PositionChange:
        project_id = blank_to_none(project_id)
        if project_id is None:
            raise validation_error("project_id is required.")

        if isinstance(action, AddPosition):
            return await self._add(project_id, action)
        if isinstance(action, UpdatePosition):
            return await self._update(project_id, action)
        if isinstance(action, DeactivatePosition):
            return await self._deactivate(project_id, action)
        raise validation_error(f"Unknown position action: {type(action).__name__}")

    async def _add(self, project_id: str, action: AddPosition) -> PositionChange:
        code = blank_to_none(action.code)
        if code is None:
            raise validation_error("Position code is required.")

        created = await self._positions.insert(
            ProjectPosition(
                id=None,
                project_id=project_id,
                name=code,
                shift=blank_to_none(action.shift),
                rotation_schedule=blank_to_none(action.rotation) or self._default_rotation,
                status=PositionStatus.ACTIVE,
            )
        )
        logger.info("Position %s (%s) added to project %s", created.id, code, project_id)
        warning = await self._record(
            AuditEntry(
                entity_type=ENTITY_TYPE,
                entity_id=created.id,
                action=AuditAction.CREATE,
                new_value=created.snapshot(),
                metadata={"project_id": project_id},
            )
        )
        return PositionChange(created, warning)

    async def _update(self, project_id: str, action: UpdatePosition) -> PositionChange:
        before = await self._load(project_id, action.position_id)
        if action.name is not None and not action.name.strip():
            raise validation_error("Position name cannot be blank.")
        changes = action.changes()
        if not changes:
            raise validation_error("No position fields to update.")

        after = await self._apply(before.id, changes)
        warning = await self._record(
            AuditEntry(
                entity_type=ENTITY_TYPE,
                entity_id=before.id,
                action=AuditAction.UPDATE,
                old_value=before.snapshot(),
                new_value=after.snapshot(),
                metadata={"project_id": project_id},
            )
        )
        return PositionChange(after, warning)

    async def _deactivate(self, project_id: str, action: DeactivatePosition) -> PositionChange:
        before = await self._load(project_id, action.position_id)
        after = await self._apply(before.id, {"status": PositionStatus.INACTIVE})
        logger.info("Position %s deactivated", before.id)
        warning = await self._record(
            AuditEntry(
                entity_type=ENTITY_TYPE,
                entity_id=before.id,
                action=AuditAction.DEACTIVATE,
                old_value=before.snapshot(),
                new_value=after.snapshot(),
                metadata={"project_id": project_id},
            )
        )
        return PositionChange(after, warning)

    async def _load(self, project_id: str, position_id: str | None) -> ProjectPosition:
        """Fetch a position that belongs to project_id; anything else is NOT_FOUND."""
        position_id = blank_to_none(position_id)
        if position_id is None:
            raise validation_error("position_id is required.")
        position = await self._positions.get_by_id(position_id)
        # UUID text from the path may differ in case from the stored form
        if position is None or position.project_id.lower() != project_id.lower():
            if position is not None:
                logger.warning(
                    "Position %s belongs to project %s, not %s",
                    position_id, position.project_id, project_id,
                )
            raise not_found(f"Position {position_id} not found.")
        return position

    async def _apply(self, position_id: str, changes: dict) -> ProjectPosition:
        after = await self._positions.update(position_id, changes)
        if after is None:
            raise not_found(f"Position {position_id} not found.")
        return after

    async def _record(self, entry: AuditEntry) -> str | None:
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
