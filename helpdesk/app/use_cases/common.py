"""
Shared use-case DTO bases

DTOs serialize with camelCase field names on the wire and accept either
spelling on input.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from helpdesk.domain.entities import AuditEvent, User

# bcrypt only reads this many bytes of a password and newer releases reject more
BCRYPT_MAX_PASSWORD_BYTES = 72


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class UserInfo(ApiModel):
    """Public view of a user record"""

    id: str
    tenant_id: str
    email: str
    role: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            tenant_id=user.tenant_id,
            email=user.email,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            avatar=user.avatar,
            is_active=user.is_active,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class AuditEventInfo(ApiModel):
    """Single audit event in responses"""

    id: str
    tenant_id: str
    actor_user_id: str
    actor_email: Optional[str] = None
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Dict[str, Any] = {}
    ip_address: str
    user_agent: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventInfo":
        return cls(
            id=str(event.id),
            tenant_id=event.tenant_id,
            actor_user_id=event.actor_user_id,
            action=event.action.value,
            resource_type=event.resource_type,
            resource_id=event.resource_id,
            details=event.details or {},
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            timestamp=event.timestamp,
        )
