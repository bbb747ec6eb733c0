import asyncio
import json

import pytest
from httpx import AsyncClient

from helpdesk.adapter.services.audit_recorder import BackgroundAuditRecorder
from helpdesk.domain.entities import AuditAction

NEW_TICKET = {
    "title": "Label printer jams",
    "description": "The label printer at packing station 2 jams on every job.",
    "priority": "High",
    "category": "hardware",
}


class GatedAuditRecorder(BackgroundAuditRecorder):
    """Holds every write until the gate opens"""

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self.gate = asyncio.Event()

    async def _write(self, event):
        await self.gate.wait()
        await super()._write(event)


@pytest.mark.asyncio
async def test_create_ticket(client: AsyncClient, app, users, auth_headers, audit_events):
    """
    Given an authenticated LogisticsCo user
    When they create a ticket
    Then it is stored in their tenant with status Open
    And the response does not wait on the single TICKET_CREATE audit event
    """
    recorder = GatedAuditRecorder(app.state.database.session_factory)
    app.state.audit_recorder = recorder
    user = users["logistics_user"]

    response = await client.post("/api/tickets", json=NEW_TICKET, headers=auth_headers(user))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    ticket = body["data"]
    assert ticket["tenantId"] == "LogisticsCo"
    assert ticket["userId"] == str(user.id)
    assert ticket["status"] == "Open"
    assert ticket["priority"] == "High"

    assert recorder.pending == 1
    recorder.gate.set()

    events = await audit_events()
    assert len(events) == 1
    event = events[0]
    assert event.action == AuditAction.ticket_create
    assert event.resource_type == "Ticket"
    assert event.resource_id == ticket["id"]
    assert event.tenant_id == "LogisticsCo"
    assert event.actor_user_id == str(user.id)
    assert event.details["statusCode"] == 201


@pytest.mark.asyncio
async def test_create_ticket_notifies_workflow(client: AsyncClient, users, auth_headers, workflow_calls):
    user = users["logistics_user"]

    response = await client.post("/api/tickets", json=NEW_TICKET, headers=auth_headers(user))

    assert response.status_code == 201
    assert len(workflow_calls) == 1
    call = workflow_calls[0]
    assert call.headers["X-Webhook-Secret"] == "test-webhook-secret"
    assert json.loads(call.content) == {
        "customerId": "LogisticsCo",
        "ticketId": response.json()["data"]["id"],
        "priority": "High",
        "category": "hardware",
        "userId": str(user.id),
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("workflow_status_code", [500])
async def test_create_ticket_when_workflow_fails(client: AsyncClient, users, auth_headers, workflow_calls):
    response = await client.post(
        "/api/tickets", json=NEW_TICKET, headers=auth_headers(users["logistics_user"])
    )

    assert response.status_code == 201
    assert len(workflow_calls) == 1


@pytest.mark.asyncio
async def test_create_ticket_validation_not_audited(client: AsyncClient, users, auth_headers, audit_events):
    response = await client.post(
        "/api/tickets",
        json={"title": "", "category": "hardware"},
        headers=auth_headers(users["logistics_user"]),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"
    assert await audit_events() == []


@pytest.mark.asyncio
async def test_list_tickets_is_tenant_scoped(client: AsyncClient, users, tickets, auth_headers):
    response = await client.get("/api/tickets", headers=auth_headers(users["logistics_user"]))

    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["id"] for t in data["tickets"]] == [str(tickets["logistics_ticket"].id)]
    assert data["pagination"] == {"page": 1, "limit": 10, "total": 1, "totalPages": 1}


@pytest.mark.asyncio
async def test_list_tickets_filters_by_status(client: AsyncClient, users, tickets, auth_headers):
    response = await client.get(
        "/api/tickets", params={"status": "Closed"}, headers=auth_headers(users["logistics_user"])
    )

    assert response.status_code == 200
    assert response.json()["data"]["tickets"] == []


@pytest.mark.asyncio
async def test_get_ticket_of_other_tenant(client: AsyncClient, users, tickets, auth_headers):
    response = await client.get(
        f"/api/tickets/{tickets['retail_ticket'].id}", headers=auth_headers(users["logistics_user"])
    )

    assert response.status_code == 403
    assert response.json()["code"] == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
async def test_super_admin_reads_other_tenant(client: AsyncClient, users, tickets, auth_headers):
    """
    Given a SuperAdmin whose home tenant is LogisticsCo
    When they list tickets with X-Tenant-Id RetailGmbH
    Then RetailGmbH tickets are returned
    """
    headers = {**auth_headers(users["super_admin"]), "X-Tenant-Id": "RetailGmbH"}

    listed = await client.get("/api/tickets", headers=headers)
    single = await client.get(f"/api/tickets/{tickets['retail_ticket'].id}", headers=headers)

    assert listed.status_code == 200
    assert [t["tenantId"] for t in listed.json()["data"]["tickets"]] == ["RetailGmbH"]
    assert single.status_code == 200


@pytest.mark.asyncio
async def test_super_admin_cannot_write_other_tenant(client: AsyncClient, users, tickets, auth_headers):
    headers = {**auth_headers(users["super_admin"]), "X-Tenant-Id": "RetailGmbH"}

    response = await client.put(
        f"/api/tickets/{tickets['retail_ticket'].id}", json={"status": "Closed"}, headers=headers
    )

    assert response.status_code == 403
    assert response.json()["code"] == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
async def test_user_tenant_header_rejected(client: AsyncClient, users, tickets, auth_headers):
    headers = {**auth_headers(users["logistics_user"]), "X-Tenant-Id": "RetailGmbH"}

    response = await client.get("/api/tickets", headers=headers)

    assert response.status_code == 403
    assert response.json()["code"] == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
async def test_update_ticket(client: AsyncClient, users, tickets, auth_headers, audit_events):
    ticket_id = str(tickets["logistics_ticket"].id)
    admin = users["logistics_admin"]

    response = await client.put(
        f"/api/tickets/{ticket_id}",
        json={"status": "InProgress", "assignedTo": str(admin.id)},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "InProgress"
    assert data["assignedTo"] == str(admin.id)
    assert data["title"] == "Pallet scanner offline"

    events = await audit_events()
    assert [(e.action, e.resource_id) for e in events] == [(AuditAction.ticket_update, ticket_id)]


@pytest.mark.asyncio
async def test_update_missing_ticket_not_audited(client: AsyncClient, users, auth_headers, audit_events):
    response = await client.put(
        "/api/tickets/00000000-0000-0000-0000-000000000000",
        json={"status": "Closed"},
        headers=auth_headers(users["logistics_user"]),
    )

    assert response.status_code == 404
    assert response.json()["code"] == "TICKET_NOT_FOUND"
    assert await audit_events() == []


@pytest.mark.asyncio
async def test_delete_ticket(client: AsyncClient, users, tickets, auth_headers, audit_events):
    ticket_id = str(tickets["logistics_ticket"].id)
    headers = auth_headers(users["logistics_user"])

    deleted = await client.delete(f"/api/tickets/{ticket_id}", headers=headers)
    fetched = await client.get(f"/api/tickets/{ticket_id}", headers=headers)
    listed = await client.get("/api/tickets", headers=headers)

    assert deleted.status_code == 200
    assert fetched.status_code == 404
    assert listed.json()["data"]["tickets"] == []
    events = await audit_events()
    assert [e.action for e in events] == [AuditAction.ticket_delete]


@pytest.mark.asyncio
async def test_update_ticket_null_title_rejected(client: AsyncClient, users, tickets, auth_headers, audit_events):
    ticket_id = str(tickets["logistics_ticket"].id)
    headers = auth_headers(users["logistics_user"])

    response = await client.put(f"/api/tickets/{ticket_id}", json={"title": None}, headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"
    fetched = await client.get(f"/api/tickets/{ticket_id}", headers=headers)
    assert fetched.json()["data"]["title"] == "Pallet scanner offline"
    assert await audit_events() == []


@pytest.mark.asyncio
async def test_update_ticket_null_assignee_unassigns(client: AsyncClient, users, tickets, auth_headers):
    ticket_id = str(tickets["logistics_ticket"].id)
    admin = users["logistics_admin"]
    headers = auth_headers(admin)
    await client.put(f"/api/tickets/{ticket_id}", json={"assignedTo": str(admin.id)}, headers=headers)

    response = await client.put(f"/api/tickets/{ticket_id}", json={"assignedTo": None}, headers=headers)

    assert response.status_code == 200
    assert response.json()["data"]["assignedTo"] is None
