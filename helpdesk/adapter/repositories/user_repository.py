from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from helpdesk.app.repositories.user_repository import IUserRepository
from helpdesk.domain.entities import Role, User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email_and_tenant(
        self, email: str, tenant_id: str, include_deleted: bool = False
    ) -> Optional[User]:
        """Get user by email within a tenant"""
        stmt = select(User).where(
            User.email == email.lower(), User.tenant_id == tenant_id
        )
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(
        self, user_id: UUID, include_deleted: bool = False
    ) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self.session.exec(stmt)
        return result.one_or_none()

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
        conditions = [User.tenant_id == tenant_id]
        if role is not None:
            conditions.append(User.role == role)
        if is_active is not None:
            conditions.append(User.is_active == is_active)
        if not include_deleted:
            conditions.append(User.deleted_at.is_(None))

        count_stmt = select(func.count()).select_from(User).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
