import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from helpdesk.adapter.database import Database
from helpdesk.adapter.services.audit_recorder import BackgroundAuditRecorder
from helpdesk.adapter.services.workflow_client import HttpWorkflowClient
from helpdesk.api.utils.auth_pipeline import AuthPipeline
from helpdesk.api.utils.audit import record_audit_intent
from helpdesk.api.utils.jwt import TokenService
from helpdesk.api.utils.logging import configure_logging
from helpdesk.libs.result import Error
from .error import INTERNAL_ERROR, RESOURCE_NOT_FOUND, VALIDATION_FAILED, ClientError, ServerError
from .responses import error_body

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(
        "Client error: code=%s status=%s path=%s",
        exc.base_error.code,
        exc.status_code,
        request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code, content=error_body(exc.base_error, exc.details)
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error("Server error: code=%s message=%s", exc.base_error.code, exc.base_error.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(Error(exc.base_error.code, INTERNAL_ERROR.message)),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    logger.info("Validation failed: path=%s errors=%s", request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_body(VALIDATION_FAILED, details)),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = RESOURCE_NOT_FOUND
    else:
        error = Error("HTTP_ERROR", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=error_body(error))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(INTERNAL_ERROR)
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.config
    if config.AUTO_CREATE_TABLES:
        await app.state.database.create_all()
    logger.info("startup.done")
    yield
    logger.info("shutdown.begin")
    await app.state.audit_recorder.drain()
    await app.state.workflow_client.close()
    await app.state.database.dispose()
    logger.info("shutdown.done")


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Helpdesk API", version="1.0.0", lifespan=lifespan)

    database = Database(ApplicationConfig.DB_URI)
    token_service = TokenService.from_config(ApplicationConfig)
    app.state.config = ApplicationConfig
    app.state.database = database
    app.state.token_service = token_service
    app.state.auth_pipeline = AuthPipeline(token_service)
    app.state.audit_recorder = BackgroundAuditRecorder(database.session_factory)
    app.state.workflow_client = HttpWorkflowClient(
        base_url=ApplicationConfig.WORKFLOW_BASE_URL,
        webhook_secret=ApplicationConfig.WEBHOOK_SECRET,
        timeout=ApplicationConfig.WORKFLOW_TIMEOUT_SECONDS,
    )

    @app.middleware("http")
    async def audit_interceptor(request: Request, call_next):
        response = await call_next(request)
        record_audit_intent(request, response)
        return response

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def request_logging_middleware(request: Request, call_next):
            start = time.perf_counter()
            method = request.method
            path = request.url.path
            logger.info("request.start method=%s path=%s", method, path)
            status_code = "unknown"
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                elapsed_ms = int((time.perf_counter() - start) * 1000)
                logger.info(
                    "request.end method=%s path=%s status=%s elapsed_ms=%s",
                    method,
                    path,
                    status_code,
                    elapsed_ms,
                )
            return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from helpdesk.api.routes import admin, auth, health_check, me, tickets, webhooks

    prefix = ApplicationConfig.API_PREFIX.rstrip("/")
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(me.router, prefix=prefix, tags=["User"])
    app.include_router(tickets.router, prefix=prefix, tags=["Tickets"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])
    app.include_router(webhooks.router, prefix=prefix, tags=["Webhooks"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
