"""
Get Audit Events Use Case

Retrieves audit events for a tenant with page-based pagination.
"""

from typing import Dict, Optional
from uuid import UUID

from helpdesk.app.repositories.audit_event_repository import AuditEventFilter
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import AuditEventInfo, Pagination
from helpdesk.domain.entities import SYSTEM_ACTOR
from helpdesk.libs.result import Result, Return
from .dtos import AuditEventsResponse


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Results are tenant-scoped (only events for the tenant)
    - Results ordered by newest first
    - Each event carries the actor's email when the actor is a user
    - Role checks happen in the route guards, not here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: str,
        filters: AuditEventFilter = AuditEventFilter(),
        page: int = 1,
        limit: int = 50,
    ) -> Result[AuditEventsResponse]:
        """
        Execute get audit events use case.

        Args:
            tenant_id: Effective tenant
            filters: action / actor / resource type / date range constraints
            page: 1-based page number
            limit: Page size

        Returns:
            Result with events and pagination
        """
        async with self.uow:
            events, total = await self.uow.audit_events.list_by_tenant(
                tenant_id, filters=filters, page=page, limit=limit
            )

            emails: Dict[str, Optional[str]] = {}
            items = []
            for event in events:
                actor = event.actor_user_id
                if actor not in emails:
                    emails[actor] = await self._actor_email(actor)
                info = AuditEventInfo.from_entity(event)
                info.actor_email = emails[actor]
                items.append(info)

        return Return.ok(
            AuditEventsResponse(events=items, pagination=Pagination.of(page, limit, total))
        )

    async def _actor_email(self, actor_user_id: str) -> Optional[str]:
        if actor_user_id == SYSTEM_ACTOR:
            return None
        try:
            user_id = UUID(actor_user_id)
        except ValueError:
            return None
        user = await self.uow.users.get_by_id(user_id, include_deleted=True)
        return user.email if user else None
