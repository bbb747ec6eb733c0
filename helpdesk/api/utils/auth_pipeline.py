"""
Authentication pipeline

A request is authenticated by running an ordered tuple of stages:

    header present -> token extracted -> signature verified
    -> claims valid -> identity live -> authenticated

Each stage either advances the attempt or raises AuthenticationError with
the specific reason. The Principal lives on the attempt, which lives only
for the request.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple
from uuid import UUID

from helpdesk.api.error import (
    ACCOUNT_INACTIVE_OR_DELETED,
    AUTH_HEADER_MALFORMED,
    AUTH_HEADER_MISSING,
    CLAIMS_INVALID_SHAPE,
)
from helpdesk.api.utils.jwt import TokenError, TokenService
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.domain.principal import Principal
from helpdesk.libs.result import Error

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)


@dataclass
class AuthAttempt:
    authorization: Optional[str]
    token: Optional[str] = None
    claims: Optional[Dict[str, Any]] = None
    principal: Optional[Principal] = None


Stage = Callable[[AuthAttempt, TokenService, UnitOfWork], Awaitable[None]]


async def require_header(attempt: AuthAttempt, tokens: TokenService, uow: UnitOfWork) -> None:
    if not attempt.authorization:
        raise AuthenticationError(AUTH_HEADER_MISSING)


async def extract_token(attempt: AuthAttempt, tokens: TokenService, uow: UnitOfWork) -> None:
    attempt.token = tokens.extract_from_header(attempt.authorization)
    if attempt.token is None:
        raise AuthenticationError(AUTH_HEADER_MALFORMED)


async def verify_signature(attempt: AuthAttempt, tokens: TokenService, uow: UnitOfWork) -> None:
    try:
        attempt.claims = tokens.verify_access_token(attempt.token)
    except TokenError as exc:
        raise AuthenticationError(exc.error) from exc


async def validate_claims(attempt: AuthAttempt, tokens: TokenService, uow: UnitOfWork) -> None:
    if not tokens.validate_claims_shape(attempt.claims):
        raise AuthenticationError(CLAIMS_INVALID_SHAPE)


async def ensure_identity_live(attempt: AuthAttempt, tokens: TokenService, uow: UnitOfWork) -> None:
    claims = attempt.claims
    try:
        user_id = UUID(claims["userId"])
    except ValueError:
        raise AuthenticationError(ACCOUNT_INACTIVE_OR_DELETED)

    async with uow:
        user = await uow.users.get_by_id(user_id, include_deleted=True)
        live = user is not None and user.is_live and user.tenant_id == claims["customerId"]

    if not live:
        raise AuthenticationError(ACCOUNT_INACTIVE_OR_DELETED)

    attempt.principal = Principal.from_claims(claims)


AUTHENTICATION_STAGES: Tuple[Stage, ...] = (
    require_header,
    extract_token,
    verify_signature,
    validate_claims,
    ensure_identity_live,
)


class AuthPipeline:
    def __init__(self, tokens: TokenService, stages: Tuple[Stage, ...] = AUTHENTICATION_STAGES):
        self.tokens = tokens
        self.stages = stages

    async def authenticate(self, authorization: Optional[str], uow: UnitOfWork) -> Principal:
        """Run every stage in order; the first failure short-circuits"""
        attempt = AuthAttempt(authorization=authorization)
        for stage in self.stages:
            await stage(attempt, self.tokens, uow)
        return attempt.principal

    async def authenticate_optional(
        self, authorization: Optional[str], uow: UnitOfWork
    ) -> Optional[Principal]:
        """Same stages; any failure yields an unauthenticated request"""
        try:
            return await self.authenticate(authorization, uow)
        except AuthenticationError as exc:
            logger.debug("auth.optional_skipped code=%s", exc.error.code)
            return None
