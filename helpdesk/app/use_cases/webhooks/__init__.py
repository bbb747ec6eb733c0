"""
Webhook Use Cases

Callbacks from the external workflow engine.
"""

from .complete_ticket_workflow_use_case import CompleteTicketWorkflowUseCase
from .record_workflow_status_use_case import RecordWorkflowStatusUseCase
from .dtos import (
    TicketDoneCommand,
    TicketDoneResponse,
    WorkflowStatusCommand,
    WorkflowStatusResponse,
)

__all__ = [
    "CompleteTicketWorkflowUseCase",
    "RecordWorkflowStatusUseCase",
    "TicketDoneCommand",
    "TicketDoneResponse",
    "WorkflowStatusCommand",
    "WorkflowStatusResponse",
]
