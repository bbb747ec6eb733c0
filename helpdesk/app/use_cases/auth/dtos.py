"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from pydantic import BaseModel

from helpdesk.app.use_cases.common import ApiModel, UserInfo


# ============================================================================
# Command DTOs
# ============================================================================


class LoginCommand(BaseModel):
    """Validated login intent"""

    email: str
    password: str
    tenant_id: str


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(ApiModel):
    """Response for user login use case"""

    access_token: str
    refresh_token: str
    expires_in: int
    user: UserInfo


class RefreshTokenResponse(ApiModel):
    """Response for refresh token use case"""

    access_token: str
    expires_in: int
