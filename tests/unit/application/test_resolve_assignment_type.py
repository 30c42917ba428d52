"""Tests for AssignmentTypeResolver."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.application.use_cases.resolve_assignment_type import AssignmentTypeResolver
from crewdesk.domain.value_objects.enums import AssignmentType


@pytest.fixture
def resolver(assignment_repo):
    return AssignmentTypeResolver(ConflictChecker(assignment_repo))


@pytest.mark.asyncio
async def test_free_worker_gets_primary(resolver):
    r = await resolver.resolve("W1")
    assert r.assignment_type == AssignmentType.PRIMARY
    assert r.requires_override is False


@pytest.mark.asyncio
async def test_worker_with_primary_gets_secondary(resolver, assignment_repo, make_assignment):
    existing = assignment_repo.seed(make_assignment(worker_id="W1"))

    r = await resolver.resolve("W1")
    assert r.assignment_type == AssignmentType.SECONDARY
    assert r.requires_override is True
    assert r.conflicting.id == existing.id


@pytest.mark.asyncio
async def test_ended_primary_does_not_block(resolver, assignment_repo, make_assignment):
    assignment_repo.seed(
        make_assignment(worker_id="W1", ended_at=datetime(2026, 3, 1, tzinfo=timezone.utc))
    )

    r = await resolver.resolve("W1")
    assert r.assignment_type == AssignmentType.PRIMARY


@pytest.mark.asyncio
async def test_explicit_secondary_request(resolver):
    r = await resolver.resolve("W1", requested_as_primary=False)
    assert r.assignment_type == AssignmentType.SECONDARY
    assert r.requires_override is True
