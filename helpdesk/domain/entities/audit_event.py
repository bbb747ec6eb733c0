"""
AuditEvent Entity

Immutable log of user and system actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from .enums import AuditAction

SYSTEM_ACTOR = "system"


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of actions per tenant.

    Business Rules:
    - Immutable (never updated)
    - Retained for 365 days, then eligible for purge
    - actor_user_id is "system" for workflow-engine callbacks
    - tenant_id is "system" for events not bound to a tenant
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: str = Field(max_length=100, index=True)
    actor_user_id: str = Field(max_length=100, index=True)

    action: AuditAction = Field(nullable=False)
    resource_type: str = Field(max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=100)
    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    ip_address: str = Field(default="Unknown", max_length=100)
    user_agent: str = Field(default="Unknown", max_length=500)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_tenant_timestamp", "tenant_id", "timestamp"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
        Index("idx_audit_tenant_actor", "tenant_id", "actor_user_id"),
        Index("idx_audit_timestamp", "timestamp"),
    )
