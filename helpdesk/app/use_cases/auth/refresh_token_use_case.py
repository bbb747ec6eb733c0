"""
Refresh Token Use Case

Exchanges a valid refresh token for a new access token.
"""

from uuid import UUID

from helpdesk.api.utils.jwt import TokenError, TokenService, identity_claims
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for access token refresh.

    Business Rules:
    - Refresh token must verify against the refresh secret
    - The identity record is re-checked: it must exist, be active and not
      soft-deleted
    - The new access token carries the user's current role and email
    - The refresh token itself is not rotated
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        try:
            claims = self.tokens.verify_refresh_token(refresh_token)
        except TokenError as exc:
            return Return.err(exc.error)

        if not self.tokens.validate_claims_shape(claims):
            return Return.err(Error("CLAIMS_INVALID_SHAPE", "Invalid token payload"))

        inactive = Error("ACCOUNT_INACTIVE_OR_DELETED", "User account is inactive or deleted")
        try:
            user_id = UUID(claims["userId"])
        except ValueError:
            return Return.err(inactive)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, include_deleted=True)

            if user is None or not user.is_live or user.tenant_id != claims["customerId"]:
                return Return.err(inactive)

            access_token = self.tokens.issue_access_token(
                identity_claims(user.tenant_id, user.role, str(user.id), user.email)
            )
        return Return.ok(
            RefreshTokenResponse(
                access_token=access_token,
                expires_in=self.tokens.seconds_until_expiry(access_token),
            )
        )
