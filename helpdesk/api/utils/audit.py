"""
Audit interceptor

A route declares what it audits with ``Depends(audited(action, type))``.
The dependency records the intent on the request; ``record_audit_intent``
runs in the HTTP middleware after the handler and submits the event to the
background recorder only when the response status is below 400.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request, Response

from helpdesk.app.services.audit_recorder import AuditSource
from helpdesk.depends import get_principal
from helpdesk.domain.entities import AuditAction, AuditEvent
from helpdesk.domain.principal import Principal

logger = logging.getLogger(__name__)


def audit_source(request: Request) -> AuditSource:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    elif request.client is not None:
        ip_address = request.client.host
    else:
        ip_address = "Unknown"
    return AuditSource(
        ip_address=ip_address or "Unknown",
        user_agent=request.headers.get("user-agent", "Unknown"),
    )


@dataclass
class AuditIntent:
    tenant_id: str
    actor_user_id: str
    action: AuditAction
    resource_type: str
    resource_id: Optional[str] = None

    def to_event(self, request: Request, status_code: int) -> AuditEvent:
        source = audit_source(request)
        return AuditEvent(
            tenant_id=self.tenant_id,
            actor_user_id=self.actor_user_id,
            action=self.action,
            resource_type=self.resource_type,
            resource_id=self.resource_id,
            details={
                "method": request.method,
                "url": str(request.url.path),
                "statusCode": status_code,
            },
            ip_address=source.ip_address,
            user_agent=source.user_agent,
        )


async def _body_identifier(request: Request) -> Optional[str]:
    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("id") is not None:
        return str(payload["id"])
    return None


def audited(action: AuditAction, resource_type: str, id_param: Optional[str] = None):
    """
    Declare the audit event a guarded route produces on success.

    Args:
        action: audit action tag
        resource_type: e.g. "Ticket", "User"
        id_param: path parameter holding the resource id; the request body
            ``id`` is used when it is absent
    """

    async def intercept(
        request: Request, principal: Principal = Depends(get_principal)
    ) -> None:
        resource_id = request.path_params.get(id_param) if id_param else None
        if resource_id is None:
            resource_id = await _body_identifier(request)

        request.state.audit_intent = AuditIntent(
            tenant_id=principal.tenant_id,
            actor_user_id=principal.user_id,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
        )

    return intercept


def set_audit_resource(request: Request, resource_id: str) -> None:
    """Name the resource of a pending audit intent, e.g. a newly created id"""
    intent = getattr(request.state, "audit_intent", None)
    if intent is not None:
        intent.resource_id = resource_id


def record_audit_intent(request: Request, response: Response) -> None:
    intent = getattr(request.state, "audit_intent", None)
    if intent is None:
        return
    if response.status_code >= 400:
        logger.debug(
            "audit.skipped action=%s status=%s", intent.action, response.status_code
        )
        return
    request.app.state.audit_recorder.submit(
        intent.to_event(request, response.status_code)
    )
