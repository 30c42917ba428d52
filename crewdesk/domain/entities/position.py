"""ProjectPosition entity — a seat on a project that workers are assigned to."""

from dataclasses import dataclass

from crewdesk.domain.value_objects.enums import PositionStatus


@dataclass
class ProjectPosition:
    id: str | None
    project_id: str
    name: str
    shift: str | None = None
    rotation_schedule: str | None = None
    status: PositionStatus = PositionStatus.ACTIVE
    notes: str | None = None

    def is_active(self) -> bool:
        return self.status == PositionStatus.ACTIVE

    def snapshot(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "shift": self.shift,
            "rotation_schedule": self.rotation_schedule,
            "status": self.status.value,
            "notes": self.notes,
        }
