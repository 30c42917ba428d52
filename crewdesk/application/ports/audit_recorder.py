"""Port interface for the append-only audit log."""

from abc import ABC, abstractmethod

from crewdesk.domain.entities.audit_entry import AuditEntry


class AuditRecorder(ABC):
    @abstractmethod
    async def record(self, entry: AuditEntry) -> str:
        """Append the entry and return its id."""
        ...
