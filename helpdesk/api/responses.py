"""
Response envelopes

Success: {"success": true, "data": ..., "message"?: ...}
Error:   {"success": false, "error": "<message>", "code": "<CODE>", "details"?: [...]}
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from helpdesk.libs.result import Error

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(data=data, message=message)


def error_body(error: Error, details: Optional[List[Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "error": error.message, "code": error.code}
    if details:
        body["details"] = details
    return body
