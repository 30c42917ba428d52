"""Project position endpoints — list, manage actions, OPCON lookup."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.adapters.persistence.database import get_session
from crewdesk.application.use_cases.manage_positions import ManagePositionsUseCase
from crewdesk.application.use_cases.resolve_opcon_supervisor import (
    ResolveOpconSupervisorUseCase,
)
from crewdesk.domain.entities.position import ProjectPosition
from crewdesk.domain.value_objects.enums import PositionStatus
from crewdesk.domain.value_objects.position_actions import (
    AddPosition,
    DeactivatePosition,
    PositionAction,
    UpdatePosition,
)
from crewdesk.infrastructure.api.dependencies import (
    get_manage_positions_uc,
    get_opcon_supervisor_uc,
)

router = APIRouter(prefix="/projects", tags=["positions"])

# ── Request schemas ─────────────────────────────────────────────────


class AddPositionBody(BaseModel):
    type: Literal["ADD"]
    code: str
    rotation: str | None = None
    shift: str | None = None

    def to_action(self) -> PositionAction:
        return AddPosition(code=self.code, rotation=self.rotation, shift=self.shift)


class UpdatePositionBody(BaseModel):
    type: Literal["UPDATE"]
    position_id: str
    name: str | None = None
    rotation_schedule: str | None = None
    shift: str | None = None
    status: PositionStatus | None = None

    def to_action(self) -> PositionAction:
        return UpdatePosition(
            position_id=self.position_id,
            name=self.name,
            rotation_schedule=self.rotation_schedule,
            shift=self.shift,
            status=self.status,
        )


class DeactivatePositionBody(BaseModel):
    type: Literal["DEACTIVATE"]
    position_id: str

    def to_action(self) -> PositionAction:
        return DeactivatePosition(position_id=self.position_id)


PositionActionBody = Annotated[
    Union[AddPositionBody, UpdatePositionBody, DeactivatePositionBody],
    Field(discriminator="type"),
]


class PositionActionRequest(BaseModel):
    action: PositionActionBody


# ── Endpoints ───────────────────────────────────────────────────────


@router.get("/{project_id}/positions")
async def list_positions(
    project_id: str,
    uc: ManagePositionsUseCase = Depends(get_manage_positions_uc),
):
    positions = await uc.list(project_id)
    return {
        "total": len(positions),
        "positions": [_serialize_position(p) for p in positions],
    }


@router.post("/{project_id}/positions/actions")
async def manage_position(
    project_id: str,
    body: PositionActionRequest,
    uc: ManagePositionsUseCase = Depends(get_manage_positions_uc),
    session: AsyncSession = Depends(get_session),
):
    """Apply one ADD / UPDATE / DEACTIVATE action to a project's positions."""
    change = await uc.execute(project_id, body.action.to_action())
    await session.commit()
    return {
        "position": _serialize_position(change.position),
        "audit_warning": change.audit_warning,
    }


@router.get("/{project_id}/opcon-supervisor")
async def get_opcon_supervisor(
    project_id: str,
    uc: ResolveOpconSupervisorUseCase = Depends(get_opcon_supervisor_uc),
):
    """Sub-customer account manager, else customer account manager, else null."""
    return {"project_id": project_id, "opcon_supervisor_id": await uc.execute(project_id)}


def _serialize_position(p: ProjectPosition) -> dict:
    data = p.snapshot()
    data["is_active"] = p.is_active()
    return data
