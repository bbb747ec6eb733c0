from typing import Callable
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Error, Result, Return
from .dtos import TicketInfo

TICKET_NOT_FOUND = Error("TICKET_NOT_FOUND", "Ticket not found")


class GetTicketUseCase:
    """
    Load one ticket of the effective tenant.

    ensure_access is the tenant guard; it raises for a ticket of another
    tenant.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ticket_id: UUID, ensure_access: Callable[[str], None]
    ) -> Result[TicketInfo]:
        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(TICKET_NOT_FOUND)
            ensure_access(ticket.tenant_id)
            return Return.ok(TicketInfo.from_entity(ticket))
