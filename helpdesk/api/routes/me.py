"""
Current User API Routes

Profile, screen configuration and the caller's own audit trail.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from helpdesk.api.error import ClientError, ServerError
from helpdesk.api.responses import ApiResponse
from helpdesk.api.utils.audit import audited, set_audit_resource
from helpdesk.app.repositories.audit_event_repository import AuditEventFilter
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.audit import AuditEventsResponse, GetAuditEventsUseCase
from helpdesk.app.use_cases.common import UserInfo
from helpdesk.app.use_cases.users import (
    GetProfileUseCase,
    GetScreensUseCase,
    ScreensResponse,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from helpdesk.depends import get_config, get_principal, get_unit_of_work
from helpdesk.domain.entities import AuditAction
from helpdesk.domain.principal import Principal

router = APIRouter(prefix="/me", tags=["User"])


def _raise_for(error):
    if error.code in ("USER_NOT_FOUND", "TENANT_CONFIG_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=ApiResponse[UserInfo])
async def get_profile(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetProfileUseCase(uow).execute(UUID(principal.user_id))
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.put(
    "/profile",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[UserInfo],
    dependencies=[Depends(audited(AuditAction.user_update, "User"))],
)
async def update_profile(
    body: UpdateProfileCommand,
    request: Request,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Profile

    Only firstName, lastName and avatar can be changed here.
    """
    set_audit_resource(request, principal.user_id)
    result = await UpdateProfileUseCase(uow).execute(UUID(principal.user_id), body)
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value, message="Profile updated successfully")


@router.get("/screens", status_code=status.HTTP_200_OK, response_model=ApiResponse[ScreensResponse])
async def get_screens(
    principal: Principal = Depends(get_principal),
    config=Depends(get_config),
):
    """
    Tenant Screens

    Screens of the caller's tenant that the caller's role may open.
    """
    result = await GetScreensUseCase(config.TENANT_SCREENS).execute(
        principal.tenant_id, principal.role
    )
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)


@router.get(
    "/audit-logs", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuditEventsResponse]
)
async def get_my_audit_logs(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    action: Optional[AuditAction] = Query(None),
):
    """Audit events where the caller is the actor"""
    filters = AuditEventFilter(action=action, actor_user_id=principal.user_id)
    result = await GetAuditEventsUseCase(uow).execute(
        principal.tenant_id, filters=filters, page=page, limit=limit
    )
    if result.is_err():
        _raise_for(result.error)
    return ApiResponse(data=result.value)
