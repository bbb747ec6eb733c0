"""
User Entity

Represents a person belonging to exactly one tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import Role


class User(SQLModel, table=True):
    """
    User entity - a person scoped to a single tenant.

    Business Rules:
    - (tenant_id, email) must be unique; email stored lowercased
    - Password stored as bcrypt hash
    - Inactive or soft-deleted users cannot authenticate
    - Soft delete: deleted_at marks deletion, default queries exclude it
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: str = Field(max_length=100, index=True)
    email: str = Field(max_length=255, index=True)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: Role = Field(default=Role.user)

    # Profile
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    avatar: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_user_tenant_deleted_at", "tenant_id", "deleted_at"),
    )

    @property
    def is_live(self) -> bool:
        return self.is_active and self.deleted_at is None
