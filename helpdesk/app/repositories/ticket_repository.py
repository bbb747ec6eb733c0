from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID

from helpdesk.domain.entities import Ticket, TicketPriority, TicketStatus


@dataclass(frozen=True)
class TicketFilter:
    """Optional ticket list filters; None means no constraint"""

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    category: Optional[str] = None
    assigned_to: Optional[UUID] = None
    user_id: Optional[UUID] = None


class ITicketRepository(ABC):
    """Ticket repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, ticket_id: UUID, include_deleted: bool = False
    ) -> Optional[Ticket]:
        """Get ticket by ID regardless of tenant"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: TicketFilter = TicketFilter(),
        page: int = 1,
        limit: int = 10,
        include_deleted: bool = False,
    ) -> Tuple[List[Ticket], int]:
        """List tickets of a tenant, newest first, with total count"""
        pass

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket"""
        pass

    @abstractmethod
    async def update(self, ticket: Ticket) -> Ticket:
        """Update existing ticket"""
        pass
