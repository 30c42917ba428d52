"""Tests for ManagePositionsUseCase."""

from __future__ import annotations

import pytest

from conftest import FakeAuditRecorder, FakePositionRepo
from crewdesk.application.use_cases.manage_positions import ManagePositionsUseCase
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.errors import AppError, ErrorCode
from crewdesk.domain.value_objects.enums import AuditAction, PositionStatus
from crewdesk.domain.value_objects.position_actions import (
    AddPosition,
    DeactivatePosition,
    UpdatePosition,
)


@pytest.fixture
def positions():
    return FakePositionRepo(
        [
            ProjectPosition(
                id="pos-a", project_id="PR1", name="DRL-01", shift="day", rotation_schedule="14/14"
            ),
            ProjectPosition(id="pos-b", project_id="PR2", name="MED-01"),
        ]
    )


@pytest.fixture
def position_audit():
    return FakeAuditRecorder()


@pytest.fixture
def uc(positions, position_audit):
    return ManagePositionsUseCase(positions, position_audit)


@pytest.mark.asyncio
async def test_list_by_project(uc):
    rows = await uc.list("PR1")
    assert [p.id for p in rows] == ["pos-a"]


@pytest.mark.asyncio
async def test_list_requires_project(uc):
    with pytest.raises(AppError) as exc:
        await uc.list(" ")
    assert exc.value.code == ErrorCode.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_add_defaults_rotation(uc, positions, position_audit):
    change = await uc.execute("PR1", AddPosition(code=" DRL-02 ", shift="night"))

    created = change.position
    assert created.id in positions.rows
    assert created.name == "DRL-02"
    assert created.rotation_schedule == "14/14"
    assert created.status == PositionStatus.ACTIVE
    assert change.audit_warning is None

    entry = position_audit.entries[-1]
    assert entry.action == AuditAction.CREATE
    assert entry.entity_type == "project_position"
    assert entry.metadata == {"project_id": "PR1"}


@pytest.mark.asyncio
async def test_add_requires_code(uc):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", AddPosition(code="  "))
    assert exc.value.message == "Position code is required."


@pytest.mark.asyncio
async def test_update_applies_supplied_fields_only(uc, position_audit):
    change = await uc.execute("PR1", UpdatePosition(position_id="pos-a", shift="night"))

    assert change.position.shift == "night"
    assert change.position.name == "DRL-01"
    entry = position_audit.entries[-1]
    assert entry.action == AuditAction.UPDATE
    assert entry.old_value["shift"] == "day"
    assert entry.new_value["shift"] == "night"


@pytest.mark.asyncio
async def test_update_rejects_blank_name(uc):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", UpdatePosition(position_id="pos-a", name="   "))
    assert exc.value.code == ErrorCode.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_update_without_fields_rejected_and_not_audited(uc, positions, position_audit):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", UpdatePosition(position_id="pos-a"))
    assert exc.value.code == ErrorCode.VALIDATION_ERROR
    assert exc.value.message == "No position fields to update."
    assert position_audit.entries == []
    assert positions.rows["pos-a"].shift == "day"


@pytest.mark.asyncio
async def test_update_unknown_position(uc):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", UpdatePosition(position_id="nope", shift="day"))
    assert exc.value.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_update_position_of_other_project_is_not_found(uc, positions, position_audit):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", UpdatePosition(position_id="pos-b", name="RENAMED"))
    assert exc.value.code == ErrorCode.NOT_FOUND

    untouched = positions.rows["pos-b"]
    assert untouched.name == "MED-01"
    assert untouched.project_id == "PR2"
    assert position_audit.entries == []


@pytest.mark.asyncio
async def test_deactivate_position_of_other_project_is_not_found(
    uc, positions, position_audit
):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", DeactivatePosition(position_id="pos-b"))
    assert exc.value.code == ErrorCode.NOT_FOUND

    assert positions.rows["pos-b"].status == PositionStatus.ACTIVE
    assert position_audit.entries == []


@pytest.mark.asyncio
async def test_deactivate_keeps_row(uc, positions, position_audit):
    change = await uc.execute("PR1", DeactivatePosition(position_id="pos-a"))

    assert change.position.status == PositionStatus.INACTIVE
    assert not positions.rows["pos-a"].is_active()
    assert position_audit.entries[-1].action == AuditAction.DEACTIVATE


@pytest.mark.asyncio
async def test_audit_failure_is_returned_as_warning(positions):
    uc = ManagePositionsUseCase(positions, FakeAuditRecorder(fail=True))

    change = await uc.execute("PR1", DeactivatePosition(position_id="pos-a"))
    assert change.position.status == PositionStatus.INACTIVE
    assert change.audit_warning is not None
    assert "audit log" in change.audit_warning

    added = await uc.execute("PR1", AddPosition(code="DRL-09"))
    assert added.position.id in positions.rows
    assert added.audit_warning is not None


@pytest.mark.asyncio
async def test_unknown_action_rejected(uc):
    with pytest.raises(AppError) as exc:
        await uc.execute("PR1", object())
    assert exc.value.code == ErrorCode.VALIDATION_ERROR
