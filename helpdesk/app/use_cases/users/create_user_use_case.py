"""
Create User Use Case

Admin-driven creation of a user inside the admin's tenant.
"""

import logging

import bcrypt

from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import UserInfo
from helpdesk.domain.entities import Role, User
from helpdesk.domain.principal import Principal
from helpdesk.libs.result import Error, Result, Return
from .dtos import CreateUserCommand

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Business Rules:
    - Role accepts the canonical or legacy spelling and is stored canonical
    - Only a SuperAdmin may create another SuperAdmin
    - Email is lowercased and unique within the tenant
    - Password stored as a bcrypt hash
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, actor: Principal, tenant_id: str, command: CreateUserCommand
    ) -> Result[UserInfo]:
        role = Role.parse(command.role)
        if role is None:
            return Return.err(
                Error("INVALID_ROLE", "Role must be one of: User, Admin, SuperAdmin")
            )
        if role == Role.super_admin and not actor.is_super_admin:
            return Return.err(
                Error("INSUFFICIENT_PERMISSIONS", "Only a super admin can create super admins")
            )

        email = command.email.lower()

        async with self.uow:
            existing = await self.uow.users.get_by_email_and_tenant(
                email, tenant_id, include_deleted=True
            )
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode(), bcrypt.gensalt(self.bcrypt_rounds)
            )
            user = User(
                tenant_id=tenant_id,
                email=email,
                password_hash=password_hash.decode(),
                role=role,
                first_name=command.first_name,
                last_name=command.last_name,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(
                "user.created user_id=%s tenant_id=%s role=%s by=%s",
                user.id,
                tenant_id,
                role.value,
                actor.user_id,
            )
            return Return.ok(UserInfo.from_entity(user))
