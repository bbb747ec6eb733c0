"""
Workflow engine HTTP client

Posts ticket events to the workflow engine's webhook, authenticated with
the shared X-Webhook-Secret header.
"""

import logging
from typing import Optional

import httpx

from helpdesk.app.services.workflow_client import (
    TicketCreatedTrigger,
    WorkflowClient,
    WorkflowTriggerError,
)

logger = logging.getLogger(__name__)


class HttpWorkflowClient(WorkflowClient):
    def __init__(
        self,
        base_url: str,
        webhook_secret: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.webhook_secret = webhook_secret
        self.session = client or httpx.AsyncClient(timeout=timeout)

    async def trigger_ticket_created(self, trigger: TicketCreatedTrigger) -> None:
        url = f"{self.base_url}/webhook/ticket-created"
        try:
            response = await self.session.post(
                url,
                json=trigger.to_payload(),
                headers={"X-Webhook-Secret": self.webhook_secret},
            )
        except httpx.HTTPError as exc:
            raise WorkflowTriggerError(f"workflow engine unreachable: {exc}") from exc

        if response.is_error:
            raise WorkflowTriggerError(
                f"workflow webhook failed: {response.status_code} {response.reason_phrase}"
            )
        logger.info(
            "workflow.triggered ticket_id=%s tenant_id=%s",
            trigger.ticket_id,
            trigger.tenant_id,
        )

    async def close(self) -> None:
        await self.session.aclose()
