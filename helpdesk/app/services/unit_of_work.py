from abc import ABC, abstractmethod

from helpdesk.app.repositories.audit_event_repository import IAuditEventRepository
from helpdesk.app.repositories.ticket_repository import ITicketRepository
from helpdesk.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Transaction boundary for use cases.

    Used as ``async with uow:``. Repositories are bound on entry; leaving
    the block without ``commit()`` discards pending changes.
    """

    users: IUserRepository
    tickets: ITicketRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        ...

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> None:
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
