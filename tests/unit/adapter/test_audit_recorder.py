import asyncio
import logging

import pytest

from helpdesk.adapter.services.audit_recorder import BackgroundAuditRecorder
from helpdesk.domain.entities import AuditAction, AuditEvent


def _event():
    return AuditEvent(
        tenant_id="LogisticsCo",
        actor_user_id="u-1",
        action=AuditAction.ticket_create,
        resource_type="Ticket",
    )


class BrokenSession:
    async def __aenter__(self):
        raise RuntimeError("database is gone")

    async def __aexit__(self, *args):
        return False


@pytest.mark.asyncio
async def test_failed_write_is_logged_not_raised(caplog):
    recorder = BackgroundAuditRecorder(lambda: BrokenSession())

    with caplog.at_level(logging.ERROR):
        recorder.submit(_event())
        await recorder.drain()

    assert recorder.pending == 0
    assert "audit.record_failed" in caplog.text


@pytest.mark.asyncio
async def test_submit_does_not_wait_for_write():
    release = asyncio.Event()

    class SlowSession(BrokenSession):
        async def __aenter__(self):
            await release.wait()
            raise RuntimeError("released")

    recorder = BackgroundAuditRecorder(lambda: SlowSession())

    recorder.submit(_event())
    assert recorder.pending == 1

    release.set()
    await recorder.drain()
    assert recorder.pending == 0
