"""Tests for domain entities."""

from datetime import date, datetime, timezone

from crewdesk.domain.entities.assignment import Assignment
from crewdesk.domain.entities.audit_entry import AuditEntry
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.value_objects.enums import (
    AssignmentStatus,
    AssignmentType,
    AuditAction,
    PositionStatus,
)


def _assignment(**kw) -> Assignment:
    defaults = dict(
        id="a-1",
        worker_id="W1",
        project_id="PR1",
        position_id="P1",
        assignment_type=AssignmentType.PRIMARY,
        assignment_start_date=date(2026, 3, 1),
        rotation_schedule="14/14",
    )
    defaults.update(kw)
    return Assignment(**defaults)


def test_assignment_defaults():
    a = _assignment()
    assert a.status == AssignmentStatus.ACTIVE
    assert a.ended_at is None
    assert a.is_active()


def test_active_follows_ended_at_not_status():
    # A legacy row whose status was never updated is still ended
    a = _assignment(ended_at=datetime(2026, 4, 1, tzinfo=timezone.utc))
    assert a.status == AssignmentStatus.ACTIVE
    assert not a.is_active()


def test_is_incumbent():
    assert _assignment().is_incumbent()
    assert _assignment(assignment_type=AssignmentType.SECONDARY).is_incumbent()
    assert not _assignment(assignment_type=AssignmentType.TEMP_COVERAGE).is_incumbent()


def test_assignment_snapshot_is_json_safe():
    ended = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)
    snap = _assignment(
        assignment_type=AssignmentType.TEMP_COVERAGE,
        assignment_end_date=date(2026, 3, 15),
        ended_at=ended,
        status=AssignmentStatus.COMPLETED,
        override_reason="covering leave",
    ).snapshot()

    assert snap["assignment_type"] == "TEMP_COVERAGE"
    assert snap["assignment_start_date"] == "2026-03-01"
    assert snap["assignment_end_date"] == "2026-03-15"
    assert snap["ended_at"] == ended.isoformat()
    assert snap["status"] == "completed"
    assert snap["override_reason"] == "covering leave"


def test_snapshot_handles_open_ended_row():
    snap = _assignment().snapshot()
    assert snap["assignment_end_date"] is None
    assert snap["ended_at"] is None


def test_position_creation():
    p = ProjectPosition(id="pos-1", project_id="PR1", name="DRL-01", shift="day")
    assert p.status == PositionStatus.ACTIVE
    assert p.is_active()
    assert p.snapshot()["status"] == "active"


def test_inactive_position():
    p = ProjectPosition(
        id="pos-1", project_id="PR1", name="DRL-01", status=PositionStatus.INACTIVE
    )
    assert not p.is_active()


def test_audit_entry_defaults():
    entry = AuditEntry(entity_type="assignment", entity_id="a-1", action=AuditAction.ASSIGN)
    assert entry.id is None
    assert entry.old_value is None
    assert entry.new_value is None
