"""
Webhook Use Case DTOs

Payloads sent by the workflow engine.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from helpdesk.app.use_cases.common import ApiModel
from helpdesk.domain.entities import TicketStatus


class TicketDoneCommand(ApiModel):
    ticket_id: str = Field(..., min_length=1)
    status: TicketStatus
    assigned_to: Optional[str] = None
    workflow_id: Optional[str] = Field(None, max_length=100)
    metadata: Optional[Dict[str, Any]] = None


class WorkflowStatusCommand(ApiModel):
    workflow_id: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    execution_id: Optional[str] = None
    error: Optional[str] = None


class TicketDoneResponse(ApiModel):
    ticket_id: str
    status: str
    updated_at: datetime


class WorkflowStatusResponse(ApiModel):
    workflow_id: str
    status: str
    received_at: datetime
