"""Tests for ConflictChecker with the in-memory assignment repo."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.domain.value_objects.enums import AssignmentType

ENDED = datetime(2026, 2, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_find_active_primary(assignment_repo, make_assignment):
    seeded = assignment_repo.seed(make_assignment(worker_id="W1"))
    checker = ConflictChecker(assignment_repo)

    found = await checker.find_active_primary("W1")
    assert found is not None
    assert found.id == seeded.id


@pytest.mark.asyncio
async def test_find_active_primary_ignores_ended_and_other_types(
    assignment_repo, make_assignment
):
    assignment_repo.seed(make_assignment(worker_id="W1", ended_at=ENDED))
    assignment_repo.seed(
        make_assignment(worker_id="W1", position_id="P2", assignment_type=AssignmentType.SECONDARY)
    )
    assignment_repo.seed(make_assignment(worker_id="W2", position_id="P3"))
    checker = ConflictChecker(assignment_repo)

    assert await checker.find_active_primary("W1") is None


@pytest.mark.asyncio
async def test_find_active_primary_returns_newest(assignment_repo, make_assignment):
    # Legacy data can hold two active PRIMARY rows; the newest one wins
    assignment_repo.seed(make_assignment(worker_id="W1", position_id="P1"))
    newest = assignment_repo.seed(make_assignment(worker_id="W1", position_id="P2"))
    checker = ConflictChecker(assignment_repo)

    found = await checker.find_active_primary("W1")
    assert found.id == newest.id


@pytest.mark.asyncio
async def test_blank_ids_return_none(assignment_repo, make_assignment):
    assignment_repo.seed(make_assignment())
    checker = ConflictChecker(assignment_repo)

    assert await checker.find_active_primary("   ") is None
    assert await checker.find_active_primary(None) is None
    assert await checker.find_active_incumbent_for_position("") is None


@pytest.mark.asyncio
async def test_incumbent_includes_secondary(assignment_repo, make_assignment):
    secondary = assignment_repo.seed(
        make_assignment(worker_id="W2", position_id="P1", assignment_type=AssignmentType.SECONDARY)
    )
    checker = ConflictChecker(assignment_repo)

    found = await checker.find_active_incumbent_for_position("P1")
    assert found.id == secondary.id


@pytest.mark.asyncio
async def test_temp_coverage_is_not_an_incumbent(assignment_repo, make_assignment):
    assignment_repo.seed(
        make_assignment(position_id="P1", assignment_type=AssignmentType.TEMP_COVERAGE)
    )
    checker = ConflictChecker(assignment_repo)

    assert await checker.find_active_incumbent_for_position("P1") is None
