from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from helpdesk.domain.entities import Role, User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email_and_tenant(
        self, email: str, tenant_id: str, include_deleted: bool = False
    ) -> Optional[User]:
        """Get user by email within a tenant"""
        pass

    @abstractmethod
    async def get_by_id(
        self, user_id: UUID, include_deleted: bool = False
    ) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
        include_deleted: bool = False,
    ) -> Tuple[List[User], int]:
        """List users of a tenant, newest first, with total count"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
