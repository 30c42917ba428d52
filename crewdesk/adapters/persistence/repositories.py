"""SQLAlchemy repository implementations."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.adapters.persistence.errors import map_db_error
from crewdesk.adapters.persistence.models import (
    AssignmentModel,
    AuditLogModel,
    CustomerModel,
    ProjectModel,
    ProjectPositionModel,
    SubCustomerModel,
)
from crewdesk.application.ports.assignment_repo import (
    AssignmentOrder,
    AssignmentQuery,
    AssignmentRepository,
)
from crewdesk.application.ports.audit_recorder import AuditRecorder
from crewdesk.application.ports.position_repo import PositionRepository
from crewdesk.application.ports.project_repo import CustomerRepository, ProjectRepository
from crewdesk.domain.entities.assignment import Assignment, AssignmentPatch
from crewdesk.domain.entities.audit_entry import AuditEntry
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.entities.project import Project
from crewdesk.domain.value_objects.enums import (
    AssignmentStatus,
    AssignmentType,
    PositionStatus,
)

ASSIGNMENT_CONFLICT_MESSAGE = (
    "Already assigned: the worker has an active PRIMARY "
    "or the position has an active incumbent."
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _is_uuid(value: str | None) -> bool:
    if not value:
        return False
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=str(m.id),
        worker_id=str(m.worker_id),
        project_id=str(m.project_id),
        position_id=str(m.position_id),
        assignment_type=AssignmentType(m.assignment_type),
        assignment_start_date=m.assignment_start_date,
        assignment_end_date=m.assignment_end_date,
        ended_at=m.ended_at,
        status=AssignmentStatus(m.status),
        override_reason=m.override_reason,
        rotation_schedule=m.rotation_schedule,
        opcon_supervisor_id=str(m.opcon_supervisor_id) if m.opcon_supervisor_id else None,
        notes=m.notes,
        created_at=m.created_at,
    )


def _position_to_domain(m: ProjectPositionModel) -> ProjectPosition:
    return ProjectPosition(
        id=str(m.id),
        project_id=str(m.project_id),
        name=m.name,
        shift=m.shift,
        rotation_schedule=m.rotation_schedule,
        status=PositionStatus(m.status),
        notes=m.notes,
    )


def _project_to_domain(m: ProjectModel) -> Project:
    return Project(
        id=str(m.id),
        customer_id=str(m.customer_id),
        project_name=m.project_name,
        sub_customer_id=str(m.sub_customer_id) if m.sub_customer_id else None,
        default_rotation=m.default_rotation,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list(self, query: AssignmentQuery) -> list[Assignment]:
        stmt = self._filtered(select(AssignmentModel), query)
        if stmt is None:
            return []

        if query.order == AssignmentOrder.CREATED_AT_DESC:
            stmt = stmt.order_by(AssignmentModel.created_at.desc())
        else:
            stmt = stmt.order_by(
                AssignmentModel.assignment_start_date.desc(),
                AssignmentModel.created_at.desc(),
            )
        if query.offset:
            stmt = stmt.offset(query.offset)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        try:
            result = await self._s.execute(stmt)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def count(self, query: AssignmentQuery) -> int:
        stmt = self._filtered(select(func.count()).select_from(AssignmentModel), query)
        if stmt is None:
            return 0
        try:
            result = await self._s.execute(stmt)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return result.scalar_one()

    @staticmethod
    def _filtered(stmt: Select, query: AssignmentQuery) -> Select | None:
        """Apply the query filters; None when an id filter cannot match any row."""
        if not query.include_ended:
            stmt = stmt.where(AssignmentModel.ended_at.is_(None))
        for column, value in (
            (AssignmentModel.worker_id, query.worker_id),
            (AssignmentModel.project_id, query.project_id),
            (AssignmentModel.position_id, query.position_id),
        ):
            if value is None:
                continue
            if not _is_uuid(value):
                return None
            stmt = stmt.where(column == value)
        if query.types:
            stmt = stmt.where(
                AssignmentModel.assignment_type.in_(sorted(t.value for t in query.types))
            )
        return stmt

    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        if not _is_uuid(assignment_id):
            return None
        try:
            m = await self._s.get(AssignmentModel, assignment_id)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return _assignment_to_domain(m) if m else None

    async def insert(self, assignment: Assignment) -> Assignment:
        m = AssignmentModel(
            worker_id=assignment.worker_id,
            project_id=assignment.project_id,
            position_id=assignment.position_id,
            assignment_type=assignment.assignment_type.value,
            assignment_start_date=assignment.assignment_start_date,
            assignment_end_date=assignment.assignment_end_date,
            ended_at=assignment.ended_at,
            status=assignment.status.value,
            override_reason=assignment.override_reason,
            rotation_schedule=assignment.rotation_schedule,
            opcon_supervisor_id=assignment.opcon_supervisor_id,
            notes=assignment.notes,
        )
        try:
            # Savepoint: a lost uniqueness race must not poison the session
            async with self._s.begin_nested():
                self._s.add(m)
            await self._s.refresh(m)
        except SQLAlchemyError as e:
            raise map_db_error(e, ASSIGNMENT_CONFLICT_MESSAGE) from e
        return _assignment_to_domain(m)

    async def update(self, assignment_id: str, patch: AssignmentPatch) -> Assignment | None:
        if not _is_uuid(assignment_id):
            return None
        try:
            m = await self._s.get(AssignmentModel, assignment_id)
            if m is None:
                return None
            m.ended_at = patch.ended_at
            m.status = patch.status.value
            await self._s.flush()
            await self._s.refresh(m)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return _assignment_to_domain(m)


class SqlAuditRecorder(AuditRecorder):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def record(self, entry: AuditEntry) -> str:
        m = AuditLogModel(
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            action=entry.action.value,
            field_changed=entry.field_changed,
            old_value=entry.old_value,
            new_value=entry.new_value,
            note=entry.note,
            metadata_=entry.metadata,
        )
        try:
            # Audit failures roll back only this savepoint, never the primary write
            async with self._s.begin_nested():
                self._s.add(m)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        entry.id = str(m.id)
        return entry.id


class SqlPositionRepository(PositionRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_by_project(self, project_id: str) -> list[ProjectPosition]:
        if not _is_uuid(project_id):
            return []
        try:
            result = await self._s.execute(
                select(ProjectPositionModel)
                .where(ProjectPositionModel.project_id == project_id)
                .order_by(ProjectPositionModel.name)
            )
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return [_position_to_domain(m) for m in result.scalars()]

    async def get_by_id(self, position_id: str) -> ProjectPosition | None:
        if not _is_uuid(position_id):
            return None
        try:
            m = await self._s.get(ProjectPositionModel, position_id)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return _position_to_domain(m) if m else None

    async def insert(self, position: ProjectPosition) -> ProjectPosition:
        m = ProjectPositionModel(
            project_id=position.project_id,
            name=position.name,
            shift=position.shift,
            rotation_schedule=position.rotation_schedule,
            status=position.status.value,
            notes=position.notes,
        )
        try:
            async with self._s.begin_nested():
                self._s.add(m)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        position.id = str(m.id)
        return position

    async def update(self, position_id: str, changes: dict) -> ProjectPosition | None:
        if not _is_uuid(position_id):
            return None
        try:
            m = await self._s.get(ProjectPositionModel, position_id)
            if m is None:
                return None
            for key, value in changes.items():
                setattr(m, key, value.value if isinstance(value, PositionStatus) else value)
            await self._s.flush()
            await self._s.refresh(m)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return _position_to_domain(m)


class SqlProjectRepository(ProjectRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, project_id: str) -> Project | None:
        if not _is_uuid(project_id):
            return None
        try:
            m = await self._s.get(ProjectModel, project_id)
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        return _project_to_domain(m) if m else None


class SqlCustomerRepository(CustomerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_account_manager_id(self, customer_id: str) -> str | None:
        return await self._manager_of(CustomerModel, customer_id)

    async def get_sub_customer_account_manager_id(self, sub_customer_id: str) -> str | None:
        return await self._manager_of(SubCustomerModel, sub_customer_id)

    async def _manager_of(self, model, row_id: str) -> str | None:
        if not _is_uuid(row_id):
            return None
        try:
            result = await self._s.execute(
                select(model.account_manager_worker_id).where(model.id == row_id)
            )
        except SQLAlchemyError as e:
            raise map_db_error(e) from e
        manager_id = result.scalar_one_or_none()
        return str(manager_id) if manager_id else None
