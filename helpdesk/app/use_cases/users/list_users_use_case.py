from typing import Optional

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import Pagination, UserInfo
from helpdesk.domain.entities import Role
from helpdesk.libs.result import Result, Return
from .dtos import UserListResponse


class ListUsersUseCase:
    """Users of the effective tenant, newest first; soft-deleted excluded"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: str,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Result[UserListResponse]:
        async with self.uow:
            users, total = await self.uow.users.list_by_tenant(
                tenant_id, role=role, is_active=is_active, page=page, limit=limit
            )
            items = [UserInfo.from_entity(u) for u in users]

        return Return.ok(
            UserListResponse(users=items, pagination=Pagination.of(page, limit, total))
        )
