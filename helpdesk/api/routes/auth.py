from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from helpdesk.api.error import ClientError, ServerError
from helpdesk.api.responses import ApiResponse
from helpdesk.api.utils.audit import audit_source
from helpdesk.api.utils.jwt import TokenService
from helpdesk.app.services.audit_recorder import AuditRecorder
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.auth import (
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
)
from helpdesk.depends import get_audit_recorder, get_config, get_token_service, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

TOKEN_ERRORS = ("TOKEN_EXPIRED", "TOKEN_INVALID", "TOKEN_MALFORMED", "CLAIMS_INVALID_SHAPE")


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    The tenant may be sent as tenantId or customerId.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    tenant_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("tenantId", "customerId", "tenant_id"),
        description="Tenant identifier",
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=ApiResponse[LoginResponse])
async def login(
    body: LoginRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
    config=Depends(get_config),
):
    """
    User Login

    Authenticates a user within a tenant and returns an access/refresh pair.

    Raises:
        - 401 Unauthorized: Invalid credentials, or inactive/deleted account
        - 400 Bad Request: Invalid input
    """
    command = LoginCommand(email=body.email, password=body.password, tenant_id=body.tenant_id)
    use_case = LoginUseCase(uow, tokens, audit, bcrypt_rounds=config.BCRYPT_ROUNDS)
    result = await use_case.execute(command, audit_source(request))

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return ApiResponse(data=result.value, message="Login successful")


class RefreshRequest(BaseModel):
    refresh_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("refreshToken", "refresh_token"),
        description="Refresh token",
    )


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=ApiResponse[RefreshTokenResponse]
)
async def refresh(
    body: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Refresh Access Token

    Raises:
        - 401 Unauthorized: Refresh token expired/invalid/malformed, or the
          account is no longer active
    """
    result = await RefreshTokenUseCase(uow, tokens).execute(body.refresh_token)

    if result.is_err():
        error = result.error
        if error.code in TOKEN_ERRORS or error.code == "ACCOUNT_INACTIVE_OR_DELETED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return ApiResponse(data=result.value, message="Token refreshed successfully")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=ApiResponse[dict])
async def logout(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Logout

    Tokens are stateless; the client discards them. Always succeeds.
    """
    await LogoutUseCase(tokens, audit).execute(authorization, audit_source(request))
    return ApiResponse(data={}, message="Logout successful")
