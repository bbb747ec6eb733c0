"""
Login Use Case

Authenticates a user within a tenant and issues an access/refresh token pair.
"""

import logging
from datetime import datetime
from functools import lru_cache

import bcrypt

from helpdesk.api.utils.jwt import TokenService, identity_claims
from helpdesk.app.services.audit_recorder import AuditRecorder, AuditSource
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.use_cases.common import BCRYPT_MAX_PASSWORD_BYTES, UserInfo
from helpdesk.domain.entities import AuditAction, AuditEvent
from helpdesk.libs.result import Error, Result, Return
from .dtos import LoginCommand, LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


@lru_cache(maxsize=None)
def dummy_password_hash(rounds: int) -> bytes:
    """Hash compared against when no real one applies, at the same cost as stored hashes"""
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - User is looked up by (tenant, lowercased email)
    - Constant-time password comparison; a dummy hash of the configured
      cost is checked when the user does not exist or the password is
      longer than bcrypt accepts
    - Inactive or soft-deleted users get the same INVALID_CREDENTIALS error
    - Updates user.last_login_at
    - Records a LOGIN audit event after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tokens: TokenService,
        audit: AuditRecorder,
        bcrypt_rounds: int = 12,
    ):
        self.uow = uow
        self.tokens = tokens
        self.audit = audit
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, command: LoginCommand, source: AuditSource = AuditSource()
    ) -> Result[LoginResponse]:
        email = command.email.strip().lower()
        password = command.password.encode()

        async with self.uow:
            user = await self.uow.users.get_by_email_and_tenant(email, command.tenant_id)

            if user is None or len(password) > BCRYPT_MAX_PASSWORD_BYTES:
                bcrypt.checkpw(
                    password[:BCRYPT_MAX_PASSWORD_BYTES], dummy_password_hash(self.bcrypt_rounds)
                )
                logger.info(
                    "auth.login_failed reason=%s tenant_id=%s",
                    "unknown_user" if user is None else "password_too_long",
                    command.tenant_id,
                )
                return Return.err(INVALID_CREDENTIALS)

            password_valid = bcrypt.checkpw(password, user.password_hash.encode())
            if not password_valid or not user.is_live:
                logger.info(
                    "auth.login_failed reason=%s user_id=%s",
                    "bad_password" if not password_valid else "inactive",
                    user.id,
                )
                return Return.err(INVALID_CREDENTIALS)

            now = datetime.utcnow()
            user.last_login_at = now
            user.updated_at = now
            await self.uow.users.update(user)
            await self.uow.commit()

            pair = self.tokens.issue_token_pair(
                identity_claims(user.tenant_id, user.role, str(user.id), user.email)
            )
            user_info = UserInfo.from_entity(user)

        self.audit.submit(
            AuditEvent(
                tenant_id=user_info.tenant_id,
                actor_user_id=user_info.id,
                action=AuditAction.login,
                resource_type="User",
                resource_id=user_info.id,
                details={"email": user_info.email, "role": user_info.role},
                ip_address=source.ip_address,
                user_agent=source.user_agent,
            )
        )

        return Return.ok(
            LoginResponse(
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
                expires_in=pair.expires_in,
                user=user_info,
            )
        )
