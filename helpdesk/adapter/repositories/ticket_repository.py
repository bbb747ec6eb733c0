from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk.app.repositories.ticket_repository import ITicketRepository, TicketFilter
from helpdesk.domain.entities import Ticket


class TicketRepository(ITicketRepository):
    """Ticket repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, ticket_id: UUID, include_deleted: bool = False
    ) -> Optional[Ticket]:
        """Get ticket by ID regardless of tenant"""
        stmt = select(Ticket).where(Ticket.id == ticket_id)
        if not include_deleted:
            stmt = stmt.where(Ticket.deleted_at.is_(None))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: TicketFilter = TicketFilter(),
        page: int = 1,
        limit: int = 10,
        include_deleted: bool = False,
    ) -> Tuple[List[Ticket], int]:
        """List tickets of a tenant, newest first, with total count"""
        conditions = [Ticket.tenant_id == tenant_id]
        if filters.status is not None:
            conditions.append(Ticket.status == filters.status)
        if filters.priority is not None:
            conditions.append(Ticket.priority == filters.priority)
        if filters.category is not None:
            conditions.append(Ticket.category == filters.category)
        if filters.assigned_to is not None:
            conditions.append(Ticket.assigned_to == filters.assigned_to)
        if filters.user_id is not None:
            conditions.append(Ticket.user_id == filters.user_id)
        if not include_deleted:
            conditions.append(Ticket.deleted_at.is_(None))

        count_stmt = select(func.count()).select_from(Ticket).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(Ticket)
            .where(*conditions)
            .order_by(Ticket.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket"""
        self.session.add(ticket)
        await self.session.flush()
        await self.session.refresh(ticket)
        return ticket

    async def update(self, ticket: Ticket) -> Ticket:
        """Update existing ticket"""
        self.session.add(ticket)
        await self.session.flush()
        await self.session.refresh(ticket)
        return ticket
