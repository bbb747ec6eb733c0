from datetime import datetime
from typing import Callable
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Result, Return
from .get_ticket_use_case import TICKET_NOT_FOUND


class DeleteTicketUseCase:
    """Soft delete: sets deleted_at, the row stays"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ticket_id: UUID, ensure_access: Callable[[str], None]
    ) -> Result[None]:
        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(TICKET_NOT_FOUND)
            ensure_access(ticket.tenant_id)

            now = datetime.utcnow()
            ticket.deleted_at = now
            ticket.updated_at = now
            await self.uow.tickets.update(ticket)
            await self.uow.commit()

        return Return.ok(None)
