"""
Webhook Secret Authentication

Validates the shared secret the workflow engine sends on its callbacks.
"""

import logging
from typing import Optional

from fastapi import Header, Request, status

from helpdesk.api.error import ClientError
from helpdesk.libs.result import Error

logger = logging.getLogger(__name__)


async def verify_webhook_secret(
    request: Request, x_webhook_secret: Optional[str] = Header(None)
) -> bool:
    """
    Verify the X-Webhook-Secret header against the configured secret.

    Service-to-service auth for the workflow engine, separate from user JWTs.
    The header must equal WEBHOOK_SECRET exactly.

    Raises:
        ClientError: 401 if the header is missing or does not match
    """
    expected = request.app.state.config.WEBHOOK_SECRET
    if not x_webhook_secret or x_webhook_secret != expected:
        logger.warning("webhook.rejected path=%s", request.url.path)
        raise ClientError(
            Error("INVALID_WEBHOOK_SECRET", "Invalid webhook secret"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return True
