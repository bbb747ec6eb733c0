"""
Webhook API Routes

Callbacks from the workflow engine, authenticated by X-Webhook-Secret.
"""

from fastapi import APIRouter, Depends, Request, status

from helpdesk.api.error import ClientError, ServerError
from helpdesk.api.responses import ApiResponse
from helpdesk.api.utils.audit import audit_source
from helpdesk.api.utils.webhook_auth import verify_webhook_secret
from helpdesk.app.services.audit_recorder import AuditRecorder
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.webhooks import (
    CompleteTicketWorkflowUseCase,
    RecordWorkflowStatusUseCase,
    TicketDoneCommand,
    TicketDoneResponse,
    WorkflowStatusCommand,
    WorkflowStatusResponse,
)
from helpdesk.depends import get_audit_recorder, get_unit_of_work

router = APIRouter(
    prefix="/webhook", tags=["Webhooks"], dependencies=[Depends(verify_webhook_secret)]
)


@router.post(
    "/ticket-done", status_code=status.HTTP_200_OK, response_model=ApiResponse[TicketDoneResponse]
)
async def ticket_done(
    body: TicketDoneCommand,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Ticket Workflow Completed

    Raises:
        - 401 Unauthorized: Missing or wrong X-Webhook-Secret
        - 404 Not Found: Unknown ticket
    """
    result = await CompleteTicketWorkflowUseCase(uow, audit).execute(body, audit_source(request))
    if result.is_err():
        error = result.error
        if error.code == "TICKET_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "VALIDATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)
    return ApiResponse(data=result.value, message="Ticket updated successfully")


@router.post(
    "/n8n-status",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[WorkflowStatusResponse],
)
async def workflow_status(
    body: WorkflowStatusCommand,
    request: Request,
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Workflow execution status report"""
    result = await RecordWorkflowStatusUseCase(audit).execute(body, audit_source(request))
    if result.is_err():
        raise ServerError(result.error)
    return ApiResponse(data=result.value, message="Status received")
