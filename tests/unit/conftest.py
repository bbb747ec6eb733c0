import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email_and_tenant = AsyncMock()
    uow.users.list_by_tenant = AsyncMock()
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.tickets = MagicMock()
    uow.tickets.get_by_id = AsyncMock()
    uow.tickets.list_by_tenant = AsyncMock()
    uow.tickets.create = AsyncMock(side_effect=lambda ticket: ticket)
    uow.tickets.update = AsyncMock(side_effect=lambda ticket: ticket)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.list_by_tenant = AsyncMock()
    uow.audit_events.delete_older_than = AsyncMock()
    return uow


@pytest.fixture
def audit_recorder():
    recorder = MagicMock()
    recorder.submit = MagicMock()
    recorder.drain = AsyncMock()
    return recorder
