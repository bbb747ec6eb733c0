from datetime import datetime
from uuid import UUID

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Error, Result, Return
from .dtos import UserStatusResponse
from .get_profile_use_case import USER_NOT_FOUND


class SetUserActiveUseCase:
    """
    Activate or deactivate a user of the admin's tenant.

    Business Rules:
    - Target must belong to the tenant, otherwise it is reported as not found
    - An admin cannot deactivate themselves
    - A deactivated user fails authentication on their next request, even
      with an unexpired token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: str, tenant_id: str, target_user_id: UUID, active: bool
    ) -> Result[UserStatusResponse]:
        if not active and str(target_user_id) == actor_user_id:
            return Return.err(
                Error("CANNOT_DEACTIVATE_SELF", "Cannot deactivate your own account")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None or user.tenant_id != tenant_id:
                return Return.err(USER_NOT_FOUND)

            user.is_active = active
            user.updated_at = datetime.utcnow()
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(
                UserStatusResponse(
                    id=str(user.id),
                    is_active=user.is_active,
                    metadata={"action": "activate" if active else "deactivate"},
                )
            )
