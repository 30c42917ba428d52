"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class AssignmentType(str, Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    TEMP_COVERAGE = "TEMP_COVERAGE"


INCUMBENT_TYPES: frozenset[AssignmentType] = frozenset(
    {AssignmentType.PRIMARY, AssignmentType.SECONDARY}
)


class AssignmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    # Legacy values still present in older rows
    ASSIGNED = "assigned"
    TEMPORARY_LEAVE = "temporary_leave"


END_STATUSES: frozenset[AssignmentStatus] = frozenset(
    {AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED}
)


class PositionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DEACTIVATE = "DEACTIVATE"
    REACTIVATE = "REACTIVATE"
    STATUS_CHANGE = "STATUS_CHANGE"
    ASSIGN = "ASSIGN"
    UNASSIGN = "UNASSIGN"
    SWAP = "SWAP"
    COMPLETE = "COMPLETE"
    CANCEL = "CANCEL"
    UPLOAD = "UPLOAD"
    DELETE = "DELETE"
