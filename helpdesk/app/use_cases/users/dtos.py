"""
User Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, field_validator

from helpdesk.app.use_cases.common import (
    BCRYPT_MAX_PASSWORD_BYTES,
    ApiModel,
    Pagination,
    UserInfo,
)


# ============================================================================
# Command DTOs
# ============================================================================


class UpdateProfileCommand(ApiModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_null(cls, value):
        # avatar may be cleared with null; names may not
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CreateUserCommand(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    # Canonical or legacy spelling; mapped by Role.parse
    role: str = "User"

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


# ============================================================================
# Response DTOs
# ============================================================================


class UserListResponse(ApiModel):
    users: List[UserInfo]
    pagination: Pagination


class ScreenInfo(ApiModel):
    id: str
    name: str
    url: str
    icon: Optional[str] = None
    permissions: List[str]


class TenantBranding(ApiModel):
    id: str
    name: str
    theme: Optional[str] = None


class ScreensResponse(ApiModel):
    tenant: TenantBranding
    screens: List[ScreenInfo]


class UserStatusResponse(ApiModel):
    id: str
    is_active: bool
    metadata: Dict[str, Any] = {}
