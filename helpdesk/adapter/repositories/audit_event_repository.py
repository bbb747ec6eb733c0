from datetime import datetime
from typing import List, Tuple

from sqlalchemy import delete
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk.app.repositories.audit_event_repository import (
    AuditEventFilter,
    IAuditEventRepository,
)
from helpdesk.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: AuditEventFilter = AuditEventFilter(),
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[AuditEvent], int]:
        """Get audit events for a tenant, newest first, with total count"""
        conditions = [AuditEvent.tenant_id == tenant_id]
        if filters.action is not None:
            conditions.append(AuditEvent.action == filters.action)
        if filters.actor_user_id is not None:
            conditions.append(AuditEvent.actor_user_id == filters.actor_user_id)
        if filters.resource_type is not None:
            conditions.append(AuditEvent.resource_type == filters.resource_type)
        if filters.resource_id is not None:
            conditions.append(AuditEvent.resource_id == filters.resource_id)
        if filters.start_date is not None:
            conditions.append(AuditEvent.timestamp >= filters.start_date)
        if filters.end_date is not None:
            conditions.append(AuditEvent.timestamp <= filters.end_date)

        count_stmt = select(func.count()).select_from(AuditEvent).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(AuditEvent)
            .where(*conditions)
            .order_by(AuditEvent.timestamp.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete events past retention"""
        stmt = delete(AuditEvent).where(AuditEvent.timestamp < cutoff)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
