"""
Helpdesk Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    LEGACY_ROLE_ALIASES,
    ROLE_VALUES,
    Role,
    TicketPriority,
    TicketStatus,
)

# Export all entities
from .user import User
from .ticket import Ticket
from .audit_event import SYSTEM_ACTOR, AuditEvent

__all__ = [
    # Enums
    "AuditAction",
    "LEGACY_ROLE_ALIASES",
    "ROLE_VALUES",
    "Role",
    "TicketPriority",
    "TicketStatus",
    # Entities
    "User",
    "Ticket",
    "AuditEvent",
    "SYSTEM_ACTOR",
]
