from helpdesk.app.repositories.ticket_repository import TicketFilter
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import Pagination
from helpdesk.libs.result import Result, Return
from .dtos import TicketInfo, TicketListResponse


class ListTicketsUseCase:
    """
    List the tickets of the effective tenant, newest first.

    Business Rules:
    - Soft-deleted tickets are excluded
    - Filters combine with AND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: str,
        filters: TicketFilter = TicketFilter(),
        page: int = 1,
        limit: int = 10,
    ) -> Result[TicketListResponse]:
        async with self.uow:
            tickets, total = await self.uow.tickets.list_by_tenant(
                tenant_id, filters=filters, page=page, limit=limit
            )
            items = [TicketInfo.from_entity(t) for t in tickets]

        return Return.ok(
            TicketListResponse(tickets=items, pagination=Pagination.of(page, limit, total))
        )
