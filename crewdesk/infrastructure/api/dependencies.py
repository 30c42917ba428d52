"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.adapters.persistence.database import get_session
from crewdesk.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlAuditRecorder,
    SqlCustomerRepository,
    SqlPositionRepository,
    SqlProjectRepository,
)
from crewdesk.application.use_cases.check_conflicts import ConflictChecker
from crewdesk.application.use_cases.list_assignments import AssignmentQueries
from crewdesk.application.use_cases.manage_positions import ManagePositionsUseCase
from crewdesk.application.use_cases.resolve_assignment_type import AssignmentTypeResolver
from crewdesk.application.use_cases.resolve_opcon_supervisor import (
    ResolveOpconSupervisorUseCase,
)
from crewdesk.application.use_cases.write_assignment import AssignmentWriter
from crewdesk.config import settings

# Re-export session dependency
get_db_session = get_session


def get_conflict_checker(session: AsyncSession = Depends(get_session)) -> ConflictChecker:
    return ConflictChecker(SqlAssignmentRepository(session))


def get_type_resolver(
    checker: ConflictChecker = Depends(get_conflict_checker),
) -> AssignmentTypeResolver:
    return AssignmentTypeResolver(checker)


def get_assignment_queries(session: AsyncSession = Depends(get_session)) -> AssignmentQueries:
    return AssignmentQueries(SqlAssignmentRepository(session))


def get_assignment_writer(session: AsyncSession = Depends(get_session)) -> AssignmentWriter:
    return AssignmentWriter(
        assignment_repo=SqlAssignmentRepository(session),
        audit=SqlAuditRecorder(session),
        default_rotation=settings.default_rotation,
    )


def get_manage_positions_uc(
    session: AsyncSession = Depends(get_session),
) -> ManagePositionsUseCase:
    return ManagePositionsUseCase(
        position_repo=SqlPositionRepository(session),
        audit=SqlAuditRecorder(session),
        default_rotation=settings.default_rotation,
    )


def get_opcon_supervisor_uc(
    session: AsyncSession = Depends(get_session),
) -> ResolveOpconSupervisorUseCase:
    return ResolveOpconSupervisorUseCase(
        project_repo=SqlProjectRepository(session),
        customer_repo=SqlCustomerRepository(session),
    )
