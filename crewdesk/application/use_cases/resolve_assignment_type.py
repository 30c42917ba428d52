"""AssignmentTypeResolver — conflict snapshot + type policy."""

from __future__ import annotations

import logging

from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.domain.policies.assignment_type import TypeResolution, resolve_assignment_type

logger = logging.getLogger(__name__)


class AssignmentTypeResolver:
    def __init__(self, checker: ConflictChecker):
        self._checker = checker

    async def resolve(
        self, worker_id: str | None, requested_as_primary: bool = True
    ) -> TypeResolution:
        """Read the worker's active PRIMARY once and apply the type policy.

        The read is a point-in-time snapshot; a concurrent request can still
        win the race, in which case the store rejects the later insert.
        """
        active_primary = await self._checker.find_active_primary(worker_id)
        resolution = resolve_assignment_type(active_primary, requested_as_primary)
        if resolution.requires_override and active_primary is not None:
            logger.info(
                "Worker %s already holds PRIMARY %s → resolving to %s",
                worker_id, active_primary.id, resolution.assignment_type.value,
            )
        return resolution
