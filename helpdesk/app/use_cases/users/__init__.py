"""
User Use Cases

Profile, screen configuration and tenant user administration.
"""

from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .get_screens_use_case import GetScreensUseCase
from .list_users_use_case import ListUsersUseCase
from .create_user_use_case import CreateUserUseCase
from .set_user_active_use_case import SetUserActiveUseCase
from .dtos import (
    CreateUserCommand,
    ScreensResponse,
    UpdateProfileCommand,
    UserListResponse,
    UserStatusResponse,
)

__all__ = [
    # Use Cases
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "GetScreensUseCase",
    "ListUsersUseCase",
    "CreateUserUseCase",
    "SetUserActiveUseCase",
    # DTOs
    "CreateUserCommand",
    "UpdateProfileCommand",
    "ScreensResponse",
    "UserListResponse",
    "UserStatusResponse",
]
