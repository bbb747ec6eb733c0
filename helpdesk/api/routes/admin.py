"""
Admin API Routes

Tenant user administration and audit log access for Admin and SuperAdmin.
Audit purge is SuperAdmin only.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from helpdesk.api.error import ClientError, ServerError
from helpdesk.api.responses import ApiResponse
from helpdesk.api.utils.audit import audited, set_audit_resource
from helpdesk.api.utils.guards import (
    TenantContext,
    get_tenant_context,
    require_admin,
    require_super_admin,
)
from helpdesk.app.repositories.audit_event_repository import AuditEventFilter
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.audit import (
    AuditEventsResponse,
    GetAuditEventsUseCase,
    PurgeAuditEventsResponse,
    PurgeAuditEventsUseCase,
)
from helpdesk.app.use_cases.common import UserInfo
from helpdesk.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    ListUsersUseCase,
    SetUserActiveUseCase,
    UserListResponse,
    UserStatusResponse,
)
from helpdesk.depends import get_config, get_unit_of_work
from helpdesk.domain.entities import AuditAction, Role
from helpdesk.domain.principal import Principal

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def _raise_for(error):
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "EMAIL_ALREADY_EXISTS":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code == "INSUFFICIENT_PERMISSIONS":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code in ("CANNOT_DEACTIVATE_SELF", "INVALID_ROLE", "INVALID_RETENTION"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("/users", status_code=status.HTTP_200_OK, response_model=ApiResponse[UserListResponse])
async def list_users(
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
):
    result = await ListUsersUseCase(uow).execute(
        tenant.tenant_id, role=role, is_active=is_active, page=page, limit=limit
    )
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserInfo],
    dependencies=[Depends(audited(AuditAction.user_create, "User"))],
)
async def create_user(
    body: CreateUserCommand,
    request: Request,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Create User

    Creates a user in the admin's tenant. The role may use the legacy
    lowercase spelling; it is stored canonical.

    Raises:
        - 409 Conflict: Email already used in this tenant
        - 403 Forbidden: An Admin tried to create a SuperAdmin
    """
    use_case = CreateUserUseCase(uow, bcrypt_rounds=config.BCRYPT_ROUNDS)
    result = await use_case.execute(tenant.principal, tenant.tenant_id, body)
    if result.is_err():
        _raise_for(result.error)

    set_audit_resource(request, result.value.id)
    return ApiResponse(data=result.value, message="User created successfully")


async def _set_active(user_id: UUID, active: bool, tenant: TenantContext, uow: UnitOfWork):
    result = await SetUserActiveUseCase(uow).execute(
        tenant.principal.user_id, tenant.tenant_id, user_id, active
    )
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.post(
    "/users/{user_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[UserStatusResponse],
    dependencies=[Depends(audited(AuditAction.user_update, "User", id_param="user_id"))],
)
async def deactivate_user(
    user_id: UUID,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate User

    The user's outstanding tokens stop working on their next request.

    Raises:
        - 400 Bad Request: Admin tried to deactivate themselves
        - 404 Not Found: No such user in this tenant
    """
    data = await _set_active(user_id, False, tenant, uow)
    return ApiResponse(data=data, message="User deactivated successfully")


@router.post(
    "/users/{user_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[UserStatusResponse],
    dependencies=[Depends(audited(AuditAction.user_update, "User", id_param="user_id"))],
)
async def activate_user(
    user_id: UUID,
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    data = await _set_active(user_id, True, tenant, uow)
    return ApiResponse(data=data, message="User activated successfully")


@router.get(
    "/audit-logs", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuditEventsResponse]
)
async def get_audit_logs(
    tenant: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    action: Optional[AuditAction] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    resource_type: Optional[str] = Query(None, alias="resourceType"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    """
    Tenant Audit Logs

    Newest first. Dates are ISO-8601; both ends are inclusive.
    """
    filters = AuditEventFilter(
        action=action,
        actor_user_id=user_id,
        resource_type=resource_type,
        start_date=start_date,
        end_date=end_date,
    )
    result = await GetAuditEventsUseCase(uow).execute(
        tenant.tenant_id, filters=filters, page=page, limit=limit
    )
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.post(
    "/audit-logs/purge",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[PurgeAuditEventsResponse],
)
async def purge_audit_logs(
    principal: Principal = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Purge Expired Audit Logs

    Deletes events older than AUDIT_RETENTION_DAYS across all tenants.
    """
    result = await PurgeAuditEventsUseCase(uow, config.AUDIT_RETENTION_DAYS).execute()
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value, message="Expired audit logs purged")
