"""
Authorization guards

Role gates and tenant isolation, applied as FastAPI dependencies after
authentication.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request, status

from helpdesk.api.error import CROSS_TENANT_ACCESS, INSUFFICIENT_PERMISSIONS, ClientError
from helpdesk.api.utils.jwt import has_role, is_admin, is_super_admin
from helpdesk.depends import get_principal
from helpdesk.domain.entities import Role
from helpdesk.domain.principal import Principal
from helpdesk.libs.result import Error

logger = logging.getLogger(__name__)

TENANT_OVERRIDE_HEADER = "X-Tenant-Id"
READ_METHODS = ("GET", "HEAD")

ADMIN_REQUIRED = Error("INSUFFICIENT_PERMISSIONS", "Admin access required")
SUPER_ADMIN_REQUIRED = Error("INSUFFICIENT_PERMISSIONS", "Super admin access required")


def _forbid(principal: Principal, error: Error) -> ClientError:
    logger.warning(
        "authz.denied code=%s user_id=%s role=%s",
        error.code,
        principal.user_id,
        principal.role.value,
    )
    return ClientError(error, status_code=status.HTTP_403_FORBIDDEN)


def require_role(*allowed: Role):
    """Guard passing only when the principal's role is exactly one of allowed"""

    async def guard(principal: Principal = Depends(get_principal)) -> Principal:
        if not has_role(principal.role, allowed):
            raise _forbid(principal, INSUFFICIENT_PERMISSIONS)
        return principal

    return guard


async def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not is_admin(principal.role):
        raise _forbid(principal, ADMIN_REQUIRED)
    return principal


async def require_super_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not is_super_admin(principal.role):
        raise _forbid(principal, SUPER_ADMIN_REQUIRED)
    return principal


@dataclass(frozen=True)
class TenantContext:
    """Effective tenant for downstream queries"""

    principal: Principal
    tenant_id: str
    overridden: bool = False

    def ensure_access(self, resource_tenant_id: str) -> None:
        """Reject a loaded resource that belongs to another tenant"""
        if resource_tenant_id != self.tenant_id:
            raise _forbid(self.principal, CROSS_TENANT_ACCESS)


def resolve_tenant_context(
    principal: Principal, requested_tenant: Optional[str], method: str
) -> TenantContext:
    """
    Decide the effective tenant of a request.

    A SuperAdmin may read another tenant by sending X-Tenant-Id. Any other
    requested tenant that differs from the principal's is rejected.
    """
    if requested_tenant and principal.is_super_admin and method.upper() in READ_METHODS:
        return TenantContext(
            principal=principal,
            tenant_id=requested_tenant,
            overridden=requested_tenant != principal.tenant_id,
        )

    if requested_tenant and requested_tenant != principal.tenant_id:
        raise _forbid(principal, CROSS_TENANT_ACCESS)

    return TenantContext(principal=principal, tenant_id=principal.tenant_id)


async def get_tenant_context(
    request: Request,
    principal: Principal = Depends(get_principal),
    x_tenant_id: Optional[str] = Header(None),
) -> TenantContext:
    context = resolve_tenant_context(principal, x_tenant_id, request.method)
    if context.overridden:
        logger.info(
            "tenant.override user_id=%s from=%s to=%s",
            principal.user_id,
            principal.tenant_id,
            context.tenant_id,
        )
    return context
