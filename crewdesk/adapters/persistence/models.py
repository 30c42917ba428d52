"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crewdesk.adapters.persistence.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class WorkerModel(Base):
    __tablename__ = "workers"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="available")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


class CustomerModel(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    account_manager_worker_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("workers.id"), nullable=True
    )

    sub_customers: Mapped[list["SubCustomerModel"]] = relationship(back_populates="customer")


class SubCustomerModel(Base):
    __tablename__ = "sub_customers"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    customer_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("customers.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    account_manager_worker_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("workers.id"), nullable=True
    )

    customer: Mapped["CustomerModel"] = relationship(back_populates="sub_customers")


class ProjectModel(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    customer_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("customers.id"), nullable=False
    )
    sub_customer_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("sub_customers.id"), nullable=True
    )
    project_name: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    default_rotation: Mapped[str | None] = mapped_column(String(20), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    positions: Mapped[list["ProjectPositionModel"]] = relationship(back_populates="project")

    __table_args__ = (Index("idx_projects_customer", "customer_id"),)


class ProjectPositionModel(Base):
    __tablename__ = "project_positions"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    project_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("projects.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    shift: Mapped[str | None] = mapped_column(String(20), nullable=True)
    rotation_schedule: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    project: Mapped["ProjectModel"] = relationship(back_populates="positions")

    __table_args__ = (Index("idx_positions_project", "project_id"),)


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    worker_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("workers.id"), nullable=False
    )
    project_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("projects.id"), nullable=False
    )
    position_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("project_positions.id"), nullable=False
    )
    assignment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    assignment_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    assignment_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    override_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    rotation_schedule: Mapped[str | None] = mapped_column(String(20), nullable=True)
    opcon_supervisor_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("workers.id"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_assignments_worker", "worker_id"),
        Index("idx_assignments_project", "project_id"),
        Index("idx_assignments_position", "position_id"),
        # One active PRIMARY per worker
        Index(
            "uq_assignments_active_primary_worker",
            "worker_id",
            unique=True,
            postgresql_where=text("ended_at IS NULL AND assignment_type = 'PRIMARY'"),
        ),
        # One active incumbent per position
        Index(
            "uq_assignments_active_incumbent_position",
            "position_id",
            unique=True,
            postgresql_where=text(
                "ended_at IS NULL AND assignment_type IN ('PRIMARY', 'SECONDARY')"
            ),
        ),
        CheckConstraint(
            "assignment_type IN ('PRIMARY', 'SECONDARY', 'TEMP_COVERAGE')",
            name="ck_assignments_type",
        ),
        CheckConstraint(
            "assignment_type = 'PRIMARY' "
            "OR (override_reason IS NOT NULL AND btrim(override_reason) <> '')",
            name="ck_assignments_override_reason",
        ),
        CheckConstraint(
            "assignment_type <> 'TEMP_COVERAGE' OR assignment_end_date IS NOT NULL",
            name="ck_assignments_coverage_end_date",
        ),
    )


class AuditLogModel(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=_uuid)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    field_changed: Mapped[str | None] = mapped_column(String(100), nullable=True)
    old_value: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    new_value: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSONB, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("idx_audit_logs_entity", "entity_type", "entity_id"),)
