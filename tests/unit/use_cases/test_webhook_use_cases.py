from uuid import uuid4

import pytest

from helpdesk.app.use_cases.webhooks import (
    CompleteTicketWorkflowUseCase,
    RecordWorkflowStatusUseCase,
    TicketDoneCommand,
    WorkflowStatusCommand,
)
from helpdesk.domain.entities import SYSTEM_ACTOR, AuditAction, Ticket, TicketStatus


@pytest.fixture
def ticket():
    return Ticket(
        id=uuid4(),
        tenant_id="RetailGmbH",
        user_id=uuid4(),
        title="Refund not processed",
        description="Refund still pending.",
        category="billing",
    )


@pytest.mark.asyncio
async def test_ticket_done_updates_ticket_and_records_system_event(
    mock_uow, audit_recorder, ticket
):
    mock_uow.tickets.get_by_id.return_value = ticket
    assignee = uuid4()
    command = TicketDoneCommand(
        ticketId=str(ticket.id),
        status=TicketStatus.resolved,
        assignedTo=str(assignee),
        workflowId="wf-99",
    )

    result = await CompleteTicketWorkflowUseCase(mock_uow, audit_recorder).execute(command)

    assert result.value.status == "Resolved"
    assert ticket.assigned_to == assignee
    assert ticket.workflow_id == "wf-99"
    mock_uow.commit.assert_called_once()

    event = audit_recorder.submit.call_args.args[0]
    assert event.actor_user_id == SYSTEM_ACTOR
    assert event.tenant_id == "RetailGmbH"
    assert event.action == AuditAction.workflow_trigger
    assert event.resource_id == str(ticket.id)


@pytest.mark.asyncio
async def test_ticket_done_unknown_ticket(mock_uow, audit_recorder):
    mock_uow.tickets.get_by_id.return_value = None
    command = TicketDoneCommand(ticketId=str(uuid4()), status=TicketStatus.closed)

    result = await CompleteTicketWorkflowUseCase(mock_uow, audit_recorder).execute(command)

    assert result.error.code == "TICKET_NOT_FOUND"
    audit_recorder.submit.assert_not_called()


@pytest.mark.asyncio
async def test_ticket_done_non_uuid_ticket_is_not_found(mock_uow, audit_recorder):
    command = TicketDoneCommand(ticketId="legacy-123", status=TicketStatus.closed)

    result = await CompleteTicketWorkflowUseCase(mock_uow, audit_recorder).execute(command)

    assert result.error.code == "TICKET_NOT_FOUND"


@pytest.mark.asyncio
async def test_workflow_status_is_recorded(audit_recorder):
    command = WorkflowStatusCommand(workflowId="wf-1", status="error", error="timeout")

    result = await RecordWorkflowStatusUseCase(audit_recorder).execute(command)

    assert result.value.workflow_id == "wf-1"
    event = audit_recorder.submit.call_args.args[0]
    assert event.tenant_id == SYSTEM_ACTOR
    assert event.details["error"] == "timeout"
