"""
Ticket API Routes

Tenant-scoped ticket CRUD. Mutations are audited.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from helpdesk.api.error import ClientError, ServerError
from helpdesk.api.responses import ApiResponse
from helpdesk.api.utils.audit import audited, set_audit_resource
from helpdesk.api.utils.guards import TenantContext, get_tenant_context
from helpdesk.app.repositories.ticket_repository import TicketFilter
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.services.workflow_client import WorkflowClient
from helpdesk.app.use_cases.tickets import (
    CreateTicketCommand,
    CreateTicketUseCase,
    DeleteTicketUseCase,
    GetTicketUseCase,
    ListTicketsUseCase,
    TicketInfo,
    TicketListResponse,
    UpdateTicketCommand,
    UpdateTicketUseCase,
)
from helpdesk.depends import get_unit_of_work, get_workflow_client
from helpdesk.domain.entities import AuditAction, TicketPriority, TicketStatus

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def _raise_for(error):
    if error.code == "TICKET_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "VALIDATION_FAILED":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=ApiResponse[TicketListResponse])
async def list_tickets(
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ticket_status: Optional[TicketStatus] = Query(None, alias="status"),
    priority: Optional[TicketPriority] = Query(None),
    category: Optional[str] = Query(None),
    assigned_to: Optional[UUID] = Query(None, alias="assignedTo"),
):
    """
    List Tickets

    Tickets of the effective tenant, newest first. A SuperAdmin may read
    another tenant with X-Tenant-Id.
    """
    filters = TicketFilter(
        status=ticket_status, priority=priority, category=category, assigned_to=assigned_to
    )
    result = await ListTicketsUseCase(uow).execute(
        tenant.tenant_id, filters=filters, page=page, limit=limit
    )
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[TicketInfo],
    dependencies=[Depends(audited(AuditAction.ticket_create, "Ticket"))],
)
async def create_ticket(
    body: CreateTicketCommand,
    request: Request,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    workflow: WorkflowClient = Depends(get_workflow_client),
):
    """
    Create Ticket

    Stores the ticket in the caller's tenant and notifies the workflow
    engine. A failed notification does not fail the request.
    """
    result = await CreateTicketUseCase(uow, workflow).execute(
        tenant.tenant_id, tenant.principal.user_id, body
    )
    if result.is_err():
        _raise_for(result.error)

    set_audit_resource(request, result.value.id)
    return ApiResponse(data=result.value, message="Ticket created successfully")


@router.get("/{ticket_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[TicketInfo])
async def get_ticket(
    ticket_id: UUID,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Ticket

    Raises:
        - 404 Not Found: No such ticket
        - 403 Forbidden: Ticket belongs to another tenant
    """
    result = await GetTicketUseCase(uow).execute(ticket_id, tenant.ensure_access)
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.put(
    "/{ticket_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[TicketInfo],
    dependencies=[Depends(audited(AuditAction.ticket_update, "Ticket", id_param="ticket_id"))],
)
async def update_ticket(
    ticket_id: UUID,
    body: UpdateTicketCommand,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateTicketUseCase(uow).execute(ticket_id, body, tenant.ensure_access)
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value, message="Ticket updated successfully")


@router.delete(
    "/{ticket_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[dict],
    dependencies=[Depends(audited(AuditAction.ticket_delete, "Ticket", id_param="ticket_id"))],
)
async def delete_ticket(
    ticket_id: UUID,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete"""
    result = await DeleteTicketUseCase(uow).execute(ticket_id, tenant.ensure_access)
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data={}, message="Ticket deleted successfully")
