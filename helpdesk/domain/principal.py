"""
Principal

The authenticated identity for the duration of one request.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from .entities.enums import Role


@dataclass(frozen=True)
class Principal:
    tenant_id: str
    user_id: str
    role: Role
    email: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Principal":
        """Build from a verified claim set (customerId/userId/role/email/iat/exp)"""
        return cls(
            tenant_id=claims["customerId"],
            user_id=claims["userId"],
            role=Role(claims["role"]),
            email=claims["email"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.admin, Role.super_admin)

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.super_admin
