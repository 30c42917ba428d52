"""Position management actions — a closed set of tagged commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from crewdesk.domain.value_objects.enums import PositionStatus


@dataclass(frozen=True)
class AddPosition:
    code: str
    rotation: str | None = None
    shift: str | None = None


@dataclass(frozen=True)
class UpdatePosition:
    position_id: str
    name: str | None = None
    rotation_schedule: str | None = None
    shift: str | None = None
    status: PositionStatus | None = None

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        fields = {
            "name": self.name.strip() if self.name is not None else None,
            "rotation_schedule": self.rotation_schedule,
            "shift": self.shift,
            "status": self.status,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass(frozen=True)
class DeactivatePosition:
    position_id: str


PositionAction = Union[AddPosition, UpdatePosition, DeactivatePosition]
