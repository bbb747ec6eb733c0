"""
Ticket Entity

Support ticket raised by a user within a tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TicketPriority, TicketStatus


class Ticket(SQLModel, table=True):
    """
    Ticket entity - field storage only, no lifecycle rules.

    Business Rules:
    - Always scoped to the creating user's tenant
    - Soft delete: deleted_at marks deletion, default queries exclude it
    - workflow_id is set by the workflow engine callback
    """

    __tablename__ = "tickets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: str = Field(max_length=100, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    title: str = Field(max_length=200)
    description: str = Field(max_length=2000)
    status: TicketStatus = Field(default=TicketStatus.open)
    priority: TicketPriority = Field(default=TicketPriority.medium)
    category: str = Field(max_length=100)

    workflow_id: Optional[str] = Field(default=None, max_length=100)
    assigned_to: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_ticket_tenant_status", "tenant_id", "status"),
        Index("idx_ticket_tenant_priority", "tenant_id", "priority"),
        Index("idx_ticket_tenant_created_at", "tenant_id", "created_at"),
        Index("idx_ticket_tenant_deleted_at", "tenant_id", "deleted_at"),
    )
