"""
Complete Ticket Workflow Use Case

Applies the workflow engine's result to a ticket.
"""

import logging
from datetime import datetime
from uuid import UUID

from helpdesk.app.services.audit_recorder import AuditRecorder, AuditSource
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.domain.entities import SYSTEM_ACTOR, AuditAction, AuditEvent
from helpdesk.libs.result import Error, Result, Return
from .dtos import TicketDoneCommand, TicketDoneResponse

logger = logging.getLogger(__name__)

TICKET_NOT_FOUND = Error("TICKET_NOT_FOUND", "Ticket not found")


class CompleteTicketWorkflowUseCase:
    """
    Business Rules:
    - The caller is the workflow engine, not a user; no tenant guard applies
    - status is stored; assignedTo and workflowId only when given
    - Records WORKFLOW_TRIGGER with actor "system" in the ticket's tenant
    """

    def __init__(self, uow: UnitOfWork, audit: AuditRecorder):
        self.uow = uow
        self.audit = audit

    async def execute(
        self, command: TicketDoneCommand, source: AuditSource = AuditSource()
    ) -> Result[TicketDoneResponse]:
        try:
            ticket_id = UUID(command.ticket_id)
        except ValueError:
            return Return.err(TICKET_NOT_FOUND)

        assigned_to = None
        if command.assigned_to:
            try:
                assigned_to = UUID(command.assigned_to)
            except ValueError:
                return Return.err(Error("VALIDATION_FAILED", "assignedTo must be a user id"))

        async with self.uow:
            ticket = await self.uow.tickets.get_by_id(ticket_id)
            if ticket is None:
                return Return.err(TICKET_NOT_FOUND)

            ticket.status = command.status
            if assigned_to is not None:
                ticket.assigned_to = assigned_to
            if command.workflow_id:
                ticket.workflow_id = command.workflow_id
            ticket.updated_at = datetime.utcnow()

            ticket = await self.uow.tickets.update(ticket)
            await self.uow.commit()

            response = TicketDoneResponse(
                ticket_id=str(ticket.id),
                status=ticket.status.value,
                updated_at=ticket.updated_at,
            )
            tenant_id = ticket.tenant_id

        self.audit.submit(
            AuditEvent(
                tenant_id=tenant_id,
                actor_user_id=SYSTEM_ACTOR,
                action=AuditAction.workflow_trigger,
                resource_type="Ticket",
                resource_id=response.ticket_id,
                details={
                    "workflowId": command.workflow_id,
                    "status": response.status,
                    "assignedTo": command.assigned_to,
                    "metadata": command.metadata or {},
                },
                ip_address=source.ip_address,
                user_agent=source.user_agent,
            )
        )
        logger.info(
            "webhook.ticket_done ticket_id=%s status=%s", response.ticket_id, response.status
        )
        return Return.ok(response)
