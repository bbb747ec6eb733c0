from datetime import datetime
from typing import Callable
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Error, Result, Return
from .dtos import TicketInfo, UpdateTicketCommand
from .get_ticket_use_case import TICKET_NOT_FOUND


class UpdateTicketUseCase:
    """
    Apply the set fields of an UpdateTicketCommand.

    Business Rules:
    - Soft-deleted tickets cannot be updated
    - No status transition rules; any status may follow any other
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        ticket_id: UUID,
        command: UpdateTicketCommand,
        ensure_access: Callable[[str], None],
    ) -> Result[TicketInfo]:
        changes = command.model_dump(exclude_unset=True)

        if "assigned_to" in changes and changes["assigned_to"] is not None:
            try:
                changes["assigned_to"] = UUID(changes["assigned_to"])
            except ValueError:
                return Return.err(Error("VALIDATION_FAILED", "assignedTo must be a user id"))

        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(TICKET_NOT_FOUND)
            ensure_access(ticket.tenant_id)

            for field, value in changes.items():
                setattr(ticket, field, value)
            ticket.updated_at = datetime.utcnow()

            ticket = await self.uow.tickets.update(ticket)
            await self.uow.commit()
            return Return.ok(TicketInfo.from_entity(ticket))
