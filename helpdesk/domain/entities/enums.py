"""
Helpdesk Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role within a tenant"""

    user = "User"
    admin = "Admin"
    super_admin = "SuperAdmin"

    @classmethod
    def parse(cls, value: str) -> Optional["Role"]:
        """Map a canonical or legacy role spelling to a Role, or None"""
        if value in ROLE_VALUES:
            return cls(value)
        alias = LEGACY_ROLE_ALIASES.get(value)
        return cls(alias) if alias else None


ROLE_VALUES = frozenset(r.value for r in Role)

# Lowercase spellings used by the shell frontend package
LEGACY_ROLE_ALIASES = {
    "user": Role.user.value,
    "admin": Role.admin.value,
    "super_admin": Role.super_admin.value,
}


class TicketStatus(str, Enum):
    """Ticket status"""

    open = "Open"
    in_progress = "InProgress"
    resolved = "Resolved"
    closed = "Closed"


class TicketPriority(str, Enum):
    """Ticket priority"""

    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"


class AuditAction(str, Enum):
    """Audited action tags"""

    login = "LOGIN"
    logout = "LOGOUT"
    ticket_create = "TICKET_CREATE"
    ticket_update = "TICKET_UPDATE"
    ticket_delete = "TICKET_DELETE"
    user_create = "USER_CREATE"
    user_update = "USER_UPDATE"
    admin_access = "ADMIN_ACCESS"
    workflow_trigger = "WORKFLOW_TRIGGER"
    webhook_received = "WEBHOOK_RECEIVED"
