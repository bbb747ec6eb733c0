"""
Ticket Use Cases
"""

from .list_tickets_use_case import ListTicketsUseCase
from .create_ticket_use_case import CreateTicketUseCase
from .get_ticket_use_case import GetTicketUseCase
from .update_ticket_use_case import UpdateTicketUseCase
from .delete_ticket_use_case import DeleteTicketUseCase
from .dtos import CreateTicketCommand, TicketInfo, TicketListResponse, UpdateTicketCommand

__all__ = [
    "ListTicketsUseCase",
    "CreateTicketUseCase",
    "GetTicketUseCase",
    "UpdateTicketUseCase",
    "DeleteTicketUseCase",
    "CreateTicketCommand",
    "UpdateTicketCommand",
    "TicketInfo",
    "TicketListResponse",
]
