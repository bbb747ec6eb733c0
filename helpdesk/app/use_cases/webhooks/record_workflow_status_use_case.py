import logging
from datetime import datetime

from helpdesk.app.services.audit_recorder import AuditRecorder, AuditSource
from helpdesk.domain.entities import SYSTEM_ACTOR, AuditAction, AuditEvent
from helpdesk.libs.result import Result, Return
from .dtos import WorkflowStatusCommand, WorkflowStatusResponse

logger = logging.getLogger(__name__)


class RecordWorkflowStatusUseCase:
    """
    Record a workflow execution status report.

    The report is not bound to a tenant, so the event is filed under the
    "system" tenant.
    """

    def __init__(self, audit: AuditRecorder):
        self.audit = audit

    async def execute(
        self, command: WorkflowStatusCommand, source: AuditSource = AuditSource()
    ) -> Result[WorkflowStatusResponse]:
        if command.error:
            logger.warning(
                "webhook.workflow_error workflow_id=%s status=%s error=%s",
                command.workflow_id,
                command.status,
                command.error,
            )

        self.audit.submit(
            AuditEvent(
                tenant_id=SYSTEM_ACTOR,
                actor_user_id=SYSTEM_ACTOR,
                action=AuditAction.workflow_trigger,
                resource_type="Workflow",
                resource_id=command.workflow_id,
                details={
                    "status": command.status,
                    "executionId": command.execution_id,
                    "error": command.error,
                },
                ip_address=source.ip_address,
                user_agent=source.user_agent,
            )
        )
        return Return.ok(
            WorkflowStatusResponse(
                workflow_id=command.workflow_id,
                status=command.status,
                received_at=datetime.utcnow(),
            )
        )
