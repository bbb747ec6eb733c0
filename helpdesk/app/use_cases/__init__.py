"""
Use Cases

Organized into domain folders:
- auth/: Login, token refresh, logout
- tickets/: Ticket CRUD
- users/: Profile, screens, tenant user administration
- audit/: Audit log listing and retention purge
- webhooks/: Workflow engine callbacks
"""

from .auth import LoginUseCase, LogoutUseCase, RefreshTokenUseCase
from .tickets import (
    CreateTicketUseCase,
    DeleteTicketUseCase,
    GetTicketUseCase,
    ListTicketsUseCase,
    UpdateTicketUseCase,
)
from .users import (
    CreateUserUseCase,
    GetProfileUseCase,
    GetScreensUseCase,
    ListUsersUseCase,
    SetUserActiveUseCase,
    UpdateProfileUseCase,
)
from .audit import GetAuditEventsUseCase, PurgeAuditEventsUseCase
from .webhooks import CompleteTicketWorkflowUseCase, RecordWorkflowStatusUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # Tickets
    "ListTicketsUseCase",
    "CreateTicketUseCase",
    "GetTicketUseCase",
    "UpdateTicketUseCase",
    "DeleteTicketUseCase",
    # Users
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "GetScreensUseCase",
    "ListUsersUseCase",
    "CreateUserUseCase",
    "SetUserActiveUseCase",
    # Audit
    "GetAuditEventsUseCase",
    "PurgeAuditEventsUseCase",
    # Webhooks
    "CompleteTicketWorkflowUseCase",
    "RecordWorkflowStatusUseCase",
]
