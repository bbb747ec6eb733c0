from datetime import datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from helpdesk.api.responses import ok

router = APIRouter(prefix="/health", tags=["Health"])

VERSION = "1.0.0"


@router.get("")
async def health():
    return ok({"status": "OK", "timestamp": datetime.utcnow().isoformat() + "Z"}, message="healthy")


@router.get("/detailed")
async def health_detailed(request: Request):
    database_ok = await request.app.state.database.ping()
    recorder = request.app.state.audit_recorder
    return ok(
        {
            "status": "OK" if database_ok else "DEGRADED",
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "version": VERSION,
            "services": {
                "database": "connected" if database_ok else "disconnected",
                "auditRecorder": {"pending": getattr(recorder, "pending", 0)},
            },
        }
    )


@router.get("/ready")
async def health_ready(request: Request):
    """503 until the database answers"""
    if not await request.app.state.database.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "error": "Service not ready", "code": "NOT_READY"},
        )
    return ok({"status": "ready"})


@router.get("/live")
async def health_live():
    """Process liveness; checks no dependencies"""
    return ok({"status": "alive"})
