"""
Background audit recorder

Writes audit events on their own database session in tasks detached from
the request. The response never waits on these writes.
"""

import asyncio
import logging
from typing import Callable, Set

from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk.adapter.repositories.audit_event_repository import AuditEventRepository
from helpdesk.app.services.audit_recorder import AuditRecorder
from helpdesk.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class BackgroundAuditRecorder(AuditRecorder):
    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self._pending: Set[asyncio.Task] = set()

    def submit(self, event: AuditEvent) -> None:
        task = asyncio.create_task(self._write(event))
        # Strong reference until done, otherwise the loop may drop the task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, event: AuditEvent) -> None:
        try:
            async with self.session_factory() as session:
                await AuditEventRepository(session).create(event)
                await session.commit()
            logger.debug(
                "audit.recorded action=%s tenant_id=%s actor=%s",
                event.action,
                event.tenant_id,
                event.actor_user_id,
            )
        except Exception:
            logger.exception(
                "audit.record_failed action=%s tenant_id=%s actor=%s",
                event.action,
                event.tenant_id,
                event.actor_user_id,
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
