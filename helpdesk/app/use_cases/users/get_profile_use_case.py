from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import UserInfo
from helpdesk.libs.result import Error, Result, Return

USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")


class GetProfileUseCase:
    """Current user's own record"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)
            return Return.ok(UserInfo.from_entity(user))
