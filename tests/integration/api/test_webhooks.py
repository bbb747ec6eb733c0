import pytest
from httpx import AsyncClient

from helpdesk.domain.entities import SYSTEM_ACTOR, AuditAction

WEBHOOK_HEADERS = {"X-Webhook-Secret": "test-webhook-secret"}


@pytest.mark.asyncio
async def test_ticket_done(client: AsyncClient, users, tickets, auth_headers, audit_events):
    """
    Given a LogisticsCo ticket
    When the workflow engine reports it resolved
    Then the ticket status, assignee and workflow id are stored
    And a WORKFLOW_TRIGGER event by the system actor is filed under LogisticsCo
    """
    ticket_id = str(tickets["logistics_ticket"].id)
    admin = users["logistics_admin"]

    response = await client.post(
        "/api/webhook/ticket-done",
        json={
            "ticketId": ticket_id,
            "status": "Resolved",
            "assignedTo": str(admin.id),
            "workflowId": "wf-42",
        },
        headers=WEBHOOK_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Resolved"

    ticket = await client.get(f"/api/tickets/{ticket_id}", headers=auth_headers(admin))
    data = ticket.json()["data"]
    assert data["status"] == "Resolved"
    assert data["assignedTo"] == str(admin.id)
    assert data["workflowId"] == "wf-42"

    events = await audit_events()
    assert len(events) == 1
    assert events[0].action == AuditAction.workflow_trigger
    assert events[0].actor_user_id == SYSTEM_ACTOR
    assert events[0].tenant_id == "LogisticsCo"
    assert events[0].resource_id == ticket_id


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"X-Webhook-Secret": "wrong"}])
async def test_ticket_done_rejects_bad_secret(client: AsyncClient, tickets, headers, audit_events):
    response = await client.post(
        "/api/webhook/ticket-done",
        json={"ticketId": str(tickets["logistics_ticket"].id), "status": "Closed"},
        headers=headers,
    )

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_WEBHOOK_SECRET"
    assert await audit_events() == []


@pytest.mark.asyncio
async def test_ticket_done_unknown_ticket(client: AsyncClient):
    response = await client.post(
        "/api/webhook/ticket-done",
        json={"ticketId": "no-such-ticket", "status": "Closed"},
        headers=WEBHOOK_HEADERS,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "TICKET_NOT_FOUND"


@pytest.mark.asyncio
async def test_ticket_done_invalid_status(client: AsyncClient, tickets):
    response = await client.post(
        "/api/webhook/ticket-done",
        json={"ticketId": str(tickets["logistics_ticket"].id), "status": "Vanished"},
        headers=WEBHOOK_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_workflow_status(client: AsyncClient, audit_events):
    response = await client.post(
        "/api/webhook/n8n-status",
        json={"workflowId": "wf-7", "status": "error", "executionId": "ex-1", "error": "timeout"},
        headers=WEBHOOK_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["data"]["workflowId"] == "wf-7"

    events = await audit_events()
    assert [(e.tenant_id, e.resource_id) for e in events] == [(SYSTEM_ACTOR, "wf-7")]
    assert events[0].details["error"] == "timeout"
