"""AssignmentTypePolicy — decide PRIMARY vs SECONDARY for an incumbent request."""

from __future__ import annotations

from dataclasses import dataclass

from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.value_objects.enums import AssignmentType


@dataclass(frozen=True)
class TypeResolution:
    """Result of the type policy evaluation."""

    assignment_type: AssignmentType
    requires_override: bool
    conflicting: Assignment | None = None  # the active PRIMARY that forced the override


def resolve_assignment_type(
    active_primary: Assignment | None,
    requested_as_primary: bool = True,
) -> TypeResolution:
    """Pure function: given the worker's active PRIMARY (if any), pick the type.

    Business rules:
      1. No active PRIMARY and PRIMARY requested  →  PRIMARY, no override.
      2. Active PRIMARY exists  →  SECONDARY, override reason required.
      3. Caller explicitly asks for a non-primary incumbent  →  SECONDARY,
         override reason required.

    TEMP_COVERAGE is never produced here; coverage has its own entry point.
    """
    if active_primary is None and requested_as_primary:
        return TypeResolution(
            assignment_type=AssignmentType.PRIMARY,
            requires_override=False,
        )

    return TypeResolution(
        assignment_type=AssignmentType.SECONDARY,
        requires_override=True,
        conflicting=active_primary,
    )
