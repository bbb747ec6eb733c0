from typing import AsyncIterator, Optional

from fastapi import Depends, Header, Request

from helpdesk.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from helpdesk.api.error import ClientError
from helpdesk.api.utils.auth_pipeline import AuthenticationError, AuthPipeline
from helpdesk.api.utils.jwt import TokenService
from helpdesk.app.services.audit_recorder import AuditRecorder
from helpdesk.app.services.unit_of_work import UnitOfWork
from helpdesk.app.services.workflow_client import WorkflowClient
from helpdesk.domain.principal import Principal


def get_config(request: Request):
    return request.app.state.config


async def get_unit_of_work(request: Request) -> AsyncIterator[UnitOfWork]:
    async with request.app.state.database.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_pipeline(request: Request) -> AuthPipeline:
    return request.app.state.auth_pipeline


def get_audit_recorder(request: Request) -> AuditRecorder:
    return request.app.state.audit_recorder


def get_workflow_client(request: Request) -> WorkflowClient:
    return request.app.state.workflow_client


async def get_principal(
    request: Request,
    authorization: Optional[str] = Header(None),
    pipeline: AuthPipeline = Depends(get_auth_pipeline),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Principal:
    """
    Authenticate the request and attach the Principal to it.

    Raises:
        ClientError: 401 with the code of the first failing stage
    """
    try:
        principal = await pipeline.authenticate(authorization, uow)
    except AuthenticationError as exc:
        raise ClientError(exc.error, status_code=401)

    request.state.principal = principal
    return principal


async def get_optional_principal(
    request: Request,
    authorization: Optional[str] = Header(None),
    pipeline: AuthPipeline = Depends(get_auth_pipeline),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Optional[Principal]:
    principal = await pipeline.authenticate_optional(authorization, uow)
    request.state.principal = principal
    return principal
