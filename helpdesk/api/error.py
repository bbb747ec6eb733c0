from typing import Any, List, Optional

from fastapi import status
from helpdesk.libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[Any]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.details = details
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Authentication failures (401)
AUTH_HEADER_MISSING = Error("AUTH_HEADER_MISSING", "Authorization header missing")
AUTH_HEADER_MALFORMED = Error(
    "AUTH_HEADER_MALFORMED", "Invalid authorization header format"
)
CLAIMS_INVALID_SHAPE = Error("CLAIMS_INVALID_SHAPE", "Invalid token payload")
ACCOUNT_INACTIVE_OR_DELETED = Error(
    "ACCOUNT_INACTIVE_OR_DELETED", "User account is inactive or deleted"
)

# Authorization failures (403)
INSUFFICIENT_PERMISSIONS = Error("INSUFFICIENT_PERMISSIONS", "Insufficient permissions")
CROSS_TENANT_ACCESS = Error("CROSS_TENANT_ACCESS", "Cross-tenant access not allowed")

VALIDATION_FAILED = Error("VALIDATION_FAILED", "Validation failed")
RESOURCE_NOT_FOUND = Error("RESOURCE_NOT_FOUND", "Route not found")
INTERNAL_ERROR = Error("INTERNAL_ERROR", "Internal server error")
