"""
Create Ticket Use Case

Stores a new ticket and notifies the workflow engine.
"""

import logging
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.services.workflow_client import (
    TicketCreatedTrigger,
    WorkflowClient,
    WorkflowTriggerError,
)
from helpdesk.domain.entities import Ticket
from helpdesk.libs.result import Result, Return
from .dtos import CreateTicketCommand, TicketInfo

logger = logging.getLogger(__name__)


class CreateTicketUseCase:
    """
    Business Rules:
    - The ticket belongs to the creator's tenant and starts Open
    - The workflow engine is notified after commit; a failed notification is
      logged and the ticket is still created
    """

    def __init__(self, uow: UnitOfWork, workflow: WorkflowClient):
        self.uow = uow
        self.workflow = workflow

    async def execute(
        self, tenant_id: str, user_id: str, command: CreateTicketCommand
    ) -> Result[TicketInfo]:
        async with self.uow:
            ticket = Ticket(
                tenant_id=tenant_id,
                user_id=UUID(user_id),
                title=command.title,
                description=command.description,
                priority=command.priority,
                category=command.category,
            )
            ticket = await self.uow.tickets.create(ticket)
            await self.uow.commit()
            info = TicketInfo.from_entity(ticket)

        try:
            await self.workflow.trigger_ticket_created(
                TicketCreatedTrigger(
                    tenant_id=info.tenant_id,
                    ticket_id=info.id,
                    priority=info.priority,
                    category=info.category,
                    user_id=info.user_id,
                )
            )
        except WorkflowTriggerError as exc:
            logger.warning("workflow.trigger_failed ticket_id=%s error=%s", info.id, exc)

        return Return.ok(info)
