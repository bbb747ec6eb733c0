from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk.adapter.repositories.audit_event_repository import AuditEventRepository
from helpdesk.adapter.repositories.ticket_repository import TicketRepository
from helpdesk.adapter.repositories.user_repository import UserRepository
from helpdesk.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over one AsyncSession shared by the helpdesk repositories"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._committed = False

    async def __aenter__(self):
        self._committed = False
        self.users = UserRepository(self.session)
        self.tickets = TicketRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Reads and failed writes end here; a clean commit has nothing left to undo
        if exc_type is not None or not self._committed:
            await self.rollback()

    async def commit(self):
        await self.session.commit()
        self._committed = True

    async def rollback(self):
        await self.session.rollback()
