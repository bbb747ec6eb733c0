from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from helpdesk.domain.entities import AuditAction, AuditEvent


@dataclass(frozen=True)
class AuditEventFilter:
    """Optional audit log filters; None means no constraint"""

    action: Optional[AuditAction] = None
    actor_user_id: Optional[str] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: AuditEventFilter = AuditEventFilter(),
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[AuditEvent], int]:
        """
        Get audit events for a tenant with page-based pagination.

        Returns:
            Tuple of (events list, total)
            - events: audit events ordered by timestamp DESC
            - total: number of events matching the filters
        """
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete events with timestamp before cutoff; returns deleted count"""
        pass
