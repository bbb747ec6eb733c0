"""
Logout Use Case

Tokens are stateless, so logout only records the event.
"""

import logging
from typing import Optional

from helpdesk.api.utils.jwt import TokenService
from helpdesk.app.services.audit_recorder import AuditRecorder, AuditSource
from helpdesk.domain.entities import AuditAction, AuditEvent
from helpdesk.libs.result import Result, Return

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Business Rules:
    - Always succeeds
    - Claims are read WITHOUT signature verification, only to attribute the
      LOGOUT audit event; nothing is authorized from them
    """

    def __init__(self, tokens: TokenService, audit: AuditRecorder):
        self.tokens = tokens
        self.audit = audit

    async def execute(
        self, authorization: Optional[str], source: AuditSource = AuditSource()
    ) -> Result[None]:
        token = self.tokens.extract_from_header(authorization)
        claims = self.tokens.decode_unsafe(token) if token else None

        tenant_id = claims.get("customerId") if claims else None
        user_id = claims.get("userId") if claims else None

        if isinstance(tenant_id, str) and isinstance(user_id, str):
            self.audit.submit(
                AuditEvent(
                    tenant_id=tenant_id,
                    actor_user_id=user_id,
                    action=AuditAction.logout,
                    resource_type="User",
                    resource_id=user_id,
                    details={"email": claims.get("email")},
                    ip_address=source.ip_address,
                    user_agent=source.user_agent,
                )
            )
        else:
            logger.debug("auth.logout_without_identity")

        return Return.ok(None)
