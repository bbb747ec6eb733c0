from datetime import datetime, timezone

import pytest

from helpdesk.api.error import ClientError
from helpdesk.api.utils.guards import (
    require_admin,
    require_role,
    require_super_admin,
    resolve_tenant_context,
)
from helpdesk.domain.entities import Role
from helpdesk.domain.principal import Principal


def _principal(role: Role, tenant_id: str = "T1") -> Principal:
    now = datetime.now(timezone.utc)
    return Principal(
        tenant_id=tenant_id,
        user_id="u-1",
        role=role,
        email="someone@example.com",
        issued_at=now,
        expires_at=now,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role,allowed", [(Role.user, False), (Role.admin, True), (Role.super_admin, False)]
)
async def test_require_role_admin_is_exact(role, allowed):
    guard = require_role(Role.admin)
    principal = _principal(role)

    if allowed:
        assert await guard(principal=principal) is principal
    else:
        with pytest.raises(ClientError) as exc:
            await guard(principal=principal)
        assert exc.value.status_code == 403
        assert exc.value.base_error.code == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role,allowed", [(Role.user, False), (Role.admin, True), (Role.super_admin, True)]
)
async def test_require_admin(role, allowed):
    if allowed:
        await require_admin(principal=_principal(role))
    else:
        with pytest.raises(ClientError) as exc:
            await require_admin(principal=_principal(role))
        assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_require_super_admin_rejects_admin():
    with pytest.raises(ClientError) as exc:
        await require_super_admin(principal=_principal(Role.admin))
    assert exc.value.base_error.code == "INSUFFICIENT_PERMISSIONS"


def test_tenant_defaults_to_principal():
    context = resolve_tenant_context(_principal(Role.user), None, "GET")

    assert context.tenant_id == "T1"
    assert context.overridden is False


def test_same_tenant_header_is_allowed():
    context = resolve_tenant_context(_principal(Role.admin), "T1", "POST")

    assert context.tenant_id == "T1"


@pytest.mark.parametrize("role", [Role.user, Role.admin])
def test_other_tenant_header_is_rejected(role):
    with pytest.raises(ClientError) as exc:
        resolve_tenant_context(_principal(role), "T2", "GET")
    assert exc.value.status_code == 403
    assert exc.value.base_error.code == "CROSS_TENANT_ACCESS"


def test_super_admin_override_sets_effective_tenant():
    context = resolve_tenant_context(_principal(Role.super_admin), "T2", "GET")

    assert context.tenant_id == "T2"
    assert context.overridden is True


def test_super_admin_override_is_read_only():
    with pytest.raises(ClientError) as exc:
        resolve_tenant_context(_principal(Role.super_admin), "T2", "POST")
    assert exc.value.base_error.code == "CROSS_TENANT_ACCESS"


def test_ensure_access_rejects_other_tenant_resource():
    context = resolve_tenant_context(_principal(Role.user), None, "GET")

    context.ensure_access("T1")
    with pytest.raises(ClientError) as exc:
        context.ensure_access("T2")
    assert exc.value.base_error.code == "CROSS_TENANT_ACCESS"


def test_ensure_access_follows_override():
    context = resolve_tenant_context(_principal(Role.super_admin), "T2", "GET")

    context.ensure_access("T2")
    with pytest.raises(ClientError):
        context.ensure_access("T1")
