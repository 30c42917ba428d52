"""Initial schema — workers, customers, projects, positions, assignments, audit.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        UUID(as_uuid=False),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def upgrade() -> None:
    # Workers
    op.create_table(
        "workers",
        _id_column(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        _created_at(),
    )

    # Customers
    op.create_table(
        "customers",
        _id_column(),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
        sa.Column(
            "account_manager_worker_id",
            UUID(as_uuid=False),
            sa.ForeignKey("workers.id"),
            nullable=True,
        ),
    )

    # Sub-customers
    op.create_table(
        "sub_customers",
        _id_column(),
        sa.Column(
            "customer_id", UUID(as_uuid=False), sa.ForeignKey("customers.id"), nullable=False
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "account_manager_worker_id",
            UUID(as_uuid=False),
            sa.ForeignKey("workers.id"),
            nullable=True,
        ),
    )

    # Projects
    op.create_table(
        "projects",
        _id_column(),
        sa.Column(
            "customer_id", UUID(as_uuid=False), sa.ForeignKey("customers.id"), nullable=False
        ),
        sa.Column(
            "sub_customer_id",
            UUID(as_uuid=False),
            sa.ForeignKey("sub_customers.id"),
            nullable=True,
        ),
        sa.Column("project_name", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date, nullable=True),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("default_rotation", sa.String(20), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_index("idx_projects_customer", "projects", ["customer_id"])

    # Project positions
    op.create_table(
        "project_positions",
        _id_column(),
        sa.Column(
            "project_id", UUID(as_uuid=False), sa.ForeignKey("projects.id"), nullable=False
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("shift", sa.String(20), nullable=True),
        sa.Column("rotation_schedule", sa.String(20), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
        _updated_at(),
    )
    op.create_index("idx_positions_project", "project_positions", ["project_id"])

    # Assignments
    op.create_table(
        "assignments",
        _id_column(),
        sa.Column("worker_id", UUID(as_uuid=False), sa.ForeignKey("workers.id"), nullable=False),
        sa.Column(
            "project_id", UUID(as_uuid=False), sa.ForeignKey("projects.id"), nullable=False
        ),
        sa.Column(
            "position_id",
            UUID(as_uuid=False),
            sa.ForeignKey("project_positions.id"),
            nullable=False,
        ),
        sa.Column("assignment_type", sa.String(20), nullable=False),
        sa.Column("assignment_start_date", sa.Date, nullable=False),
        sa.Column("assignment_end_date", sa.Date, nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("override_reason", sa.Text, nullable=True),
        sa.Column("rotation_schedule", sa.String(20), nullable=True),
        sa.Column(
            "opcon_supervisor_id",
            UUID(as_uuid=False),
            sa.ForeignKey("workers.id"),
            nullable=True,
        ),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "assignment_type IN ('PRIMARY', 'SECONDARY', 'TEMP_COVERAGE')",
            name="ck_assignments_type",
        ),
        sa.CheckConstraint(
            "assignment_type = 'PRIMARY' "
            "OR (override_reason IS NOT NULL AND btrim(override_reason) <> '')",
            name="ck_assignments_override_reason",
        ),
        sa.CheckConstraint(
            "assignment_type <> 'TEMP_COVERAGE' OR assignment_end_date IS NOT NULL",
            name="ck_assignments_coverage_end_date",
        ),
    )
    op.create_index("idx_assignments_worker", "assignments", ["worker_id"])
    op.create_index("idx_assignments_project", "assignments", ["project_id"])
    op.create_index("idx_assignments_position", "assignments", ["position_id"])
    op.create_index(
        "uq_assignments_active_primary_worker",
        "assignments",
        ["worker_id"],
        unique=True,
        postgresql_where=sa.text("ended_at IS NULL AND assignment_type = 'PRIMARY'"),
    )
    op.create_index(
        "uq_assignments_active_incumbent_position",
        "assignments",
        ["position_id"],
        unique=True,
        postgresql_where=sa.text(
            "ended_at IS NULL AND assignment_type IN ('PRIMARY', 'SECONDARY')"
        ),
    )

    # Audit log
    op.create_table(
        "audit_logs",
        _id_column(),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("field_changed", sa.String(100), nullable=True),
        sa.Column("old_value", JSONB, nullable=True),
        sa.Column("new_value", JSONB, nullable=True),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("metadata", JSONB, nullable=True),
        _created_at(),
    )
    op.create_index("idx_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("assignments")
    op.drop_table("project_positions")
    op.drop_table("projects")
    op.drop_table("sub_customers")
    op.drop_table("customers")
    op.drop_table("workers")
