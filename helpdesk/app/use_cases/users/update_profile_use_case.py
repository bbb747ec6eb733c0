from datetime import datetime
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import UserInfo
from helpdesk.libs.result import Result, Return
from .dtos import UpdateProfileCommand
from .get_profile_use_case import USER_NOT_FOUND


class UpdateProfileUseCase:
    """
    Update the current user's display fields.

    Business Rules:
    - Only firstName, lastName and avatar are editable here
    - Email, role and tenant never change through the profile
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: UpdateProfileCommand) -> Result[UserInfo]:
        changes = command.model_dump(exclude_unset=True)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = datetime.utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()
            return Return.ok(UserInfo.from_entity(user))
