"""
Ticket Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from helpdesk.app.use_cases.common import ApiModel, Pagination
from helpdesk.domain.entities import Ticket, TicketPriority, TicketStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTicketCommand(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    priority: TicketPriority = TicketPriority.medium
    category: str = Field(..., min_length=1, max_length=100)


class UpdateTicketCommand(ApiModel):
    """Only the fields that are set are applied"""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    assigned_to: Optional[str] = None

    @field_validator("title", "description", "status", "priority", "category")
    @classmethod
    def not_null(cls, value):
        # Omit a field to keep it; only assignedTo may be cleared with null
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


# ============================================================================
# Response DTOs
# ============================================================================


class TicketInfo(ApiModel):
    id: str
    tenant_id: str
    user_id: str
    title: str
    description: str
    status: str
    priority: str
    category: str
    workflow_id: Optional[str] = None
    assigned_to: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, ticket: Ticket) -> "TicketInfo":
        return cls(
            id=str(ticket.id),
            tenant_id=ticket.tenant_id,
            user_id=str(ticket.user_id),
            title=ticket.title,
            description=ticket.description,
            status=ticket.status.value,
            priority=ticket.priority.value,
            category=ticket.category,
            workflow_id=ticket.workflow_id,
            assigned_to=str(ticket.assigned_to) if ticket.assigned_to else None,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )


class TicketListResponse(ApiModel):
    tickets: List[TicketInfo]
    pagination: Pagination
