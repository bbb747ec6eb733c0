"""
Purge Audit Events Use Case

Deletes audit events past the retention window.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Error, Result, Return
from .dtos import PurgeAuditEventsResponse

logger = logging.getLogger(__name__)


class PurgeAuditEventsUseCase:
    """
    Business Rules:
    - Events older than retention_days (default 365) are deleted for every
      tenant
    - Events inside the window are never touched
    """

    def __init__(self, uow: UnitOfWork, retention_days: int = 365):
        self.uow = uow
        self.retention_days = retention_days

    async def execute(self, now: Optional[datetime] = None) -> Result[PurgeAuditEventsResponse]:
        if self.retention_days < 1:
            return Return.err(
                Error("INVALID_RETENTION", "Retention must be at least one day")
            )

        cutoff = (now or datetime.utcnow()) - timedelta(days=self.retention_days)

        async with self.uow:
            deleted = await self.uow.audit_events.delete_older_than(cutoff)
            await self.uow.commit()

        logger.info("audit.purged deleted=%s cutoff=%s", deleted, cutoff.isoformat())
        return Return.ok(
            PurgeAuditEventsResponse(
                deleted=deleted, cutoff=cutoff, retention_days=self.retention_days
            )
        )
