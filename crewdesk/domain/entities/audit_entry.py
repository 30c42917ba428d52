"""AuditEntry — one append-only record of a change to a business entity."""

from dataclasses import dataclass, field

from crewdesk.domain.value_objects.enums import AuditAction


@dataclass
class AuditEntry:
    entity_type: str
    entity_id: str
    action: AuditAction
    old_value: dict | None = None
    new_value: dict | None = None
    field_changed: str | None = None
    note: str | None = None
    metadata: dict | None = field(default=None)
    id: str | None = None
