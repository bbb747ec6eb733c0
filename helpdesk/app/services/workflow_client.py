from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TicketCreatedTrigger:
    """Payload sent to the workflow engine when a ticket is created"""

    tenant_id: str
    ticket_id: str
    priority: str
    category: str
    user_id: str

    def to_payload(self) -> dict:
        return {
            "customerId": self.tenant_id,
            "ticketId": self.ticket_id,
            "priority": self.priority,
            "category": self.category,
            "userId": self.user_id,
        }


class WorkflowTriggerError(Exception):
    """Raised when the workflow engine rejects or cannot receive a trigger"""


class WorkflowClient(ABC):
    """Outbound workflow-engine client - application layer"""

    @abstractmethod
    async def trigger_ticket_created(self, trigger: TicketCreatedTrigger) -> None:
        """Raises WorkflowTriggerError on failure"""
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
