"""
Get Screens Use Case

Per-tenant screen configuration consumed by the frontend shell.
"""

from typing import Any, Dict

from helpdesk.domain.entities import Role
from helpdesk.libs.result import Error, Result, Return
from .dtos import ScreenInfo, ScreensResponse, TenantBranding


class GetScreensUseCase:
    """
    Business Rules:
    - Only screens whose permissions include the caller's role are returned
    - Permissions may use legacy role spellings; they are mapped to the
      canonical role before comparing
    - SuperAdmin sees every screen of the tenant
    """

    def __init__(self, tenant_screens: Dict[str, Dict[str, Any]]):
        self.tenant_screens = tenant_screens

    async def execute(self, tenant_id: str, role: Role) -> Result[ScreensResponse]:
        config = self.tenant_screens.get(tenant_id)
        if config is None:
            return Return.err(
                Error("TENANT_CONFIG_NOT_FOUND", "Tenant configuration not found")
            )

        screens = []
        for screen in config.get("screens", []):
            allowed = [Role.parse(p) for p in screen.get("permissions", [])]
            if role == Role.super_admin or role in allowed:
                screens.append(ScreenInfo(**screen))

        return Return.ok(
            ScreensResponse(
                tenant=TenantBranding(
                    id=tenant_id,
                    name=config.get("name", tenant_id),
                    theme=config.get("theme"),
                ),
                screens=screens,
            )
        )
