from abc import ABC, abstractmethod
from dataclasses import dataclass

from helpdesk.domain.entities import AuditEvent


@dataclass(frozen=True)
class AuditSource:
    """Where a request came from, as recorded on audit events"""

    ip_address: str = "Unknown"
    user_agent: str = "Unknown"


class AuditRecorder(ABC):
    """
    Best-effort audit sink - application layer.

    submit() schedules the write and returns immediately; failures are
    logged by the implementation and never reach the caller.
    """

    @abstractmethod
    def submit(self, event: AuditEvent) -> None:
        pass

    @abstractmethod
    async def drain(self) -> None:
        """Wait for every submitted write to finish"""
        pass
