from datetime import datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest

from helpdesk.api.utils.auth_pipeline import (
    AUTHENTICATION_STAGES,
    AuthAttempt,
    AuthenticationError,
    AuthPipeline,
    ensure_identity_live,
    extract_token,
    require_header,
    validate_claims,
    verify_signature,
)
from helpdesk.api.utils.jwt import TokenService, identity_claims
from helpdesk.depends import get_optional_principal
from helpdesk.domain.entities import Role, User


@pytest.fixture
def tokens():
    return TokenService("unit-access-secret", "unit-refresh-secret")


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        tenant_id="LogisticsCo",
        email="user@logistics.example",
        password_hash="x" * 60,
        role=Role.user,
        first_name="Uma",
        last_name="User",
    )


def _header(tokens, user):
    token = tokens.issue_access_token(
        identity_claims(user.tenant_id, user.role, str(user.id), user.email)
    )
    return f"Bearer {token}"


def test_stages_are_ordered():
    assert AUTHENTICATION_STAGES == (
        require_header,
        extract_token,
        verify_signature,
        validate_claims,
        ensure_identity_live,
    )


@pytest.mark.asyncio
async def test_require_header_rejects_missing(tokens, mock_uow):
    with pytest.raises(AuthenticationError) as exc:
        await require_header(AuthAttempt(authorization=None), tokens, mock_uow)
    assert exc.value.error.code == "AUTH_HEADER_MISSING"


@pytest.mark.asyncio
async def test_extract_token_rejects_other_scheme(tokens, mock_uow):
    with pytest.raises(AuthenticationError) as exc:
        await extract_token(AuthAttempt(authorization="Basic dXNlcjpwYXNz"), tokens, mock_uow)
    assert exc.value.error.code == "AUTH_HEADER_MALFORMED"


@pytest.mark.asyncio
async def test_verify_signature_maps_token_errors(tokens, mock_uow):
    attempt = AuthAttempt(authorization="Bearer nope", token="nope")

    with pytest.raises(AuthenticationError) as exc:
        await verify_signature(attempt, tokens, mock_uow)
    assert exc.value.error.code == "TOKEN_MALFORMED"


@pytest.mark.asyncio
async def test_validate_claims_rejects_bad_shape(tokens, mock_uow):
    attempt = AuthAttempt(authorization="Bearer t", token="t", claims={"customerId": "LogisticsCo"})

    with pytest.raises(AuthenticationError) as exc:
        await validate_claims(attempt, tokens, mock_uow)
    assert exc.value.error.code == "CLAIMS_INVALID_SHAPE"


@pytest.mark.asyncio
async def test_authenticate_returns_principal(tokens, mock_uow, user):
    mock_uow.users.get_by_id.return_value = user

    principal = await AuthPipeline(tokens).authenticate(_header(tokens, user), mock_uow)

    assert principal.user_id == str(user.id)
    assert principal.tenant_id == "LogisticsCo"
    assert principal.role == Role.user
    assert principal.expires_at > principal.issued_at
    mock_uow.users.get_by_id.assert_called_once_with(user.id, include_deleted=True)


@pytest.mark.asyncio
async def test_deactivated_user_is_rejected_with_valid_token(tokens, mock_uow, user):
    header = _header(tokens, user)
    user.is_active = False
    mock_uow.users.get_by_id.return_value = user

    with pytest.raises(AuthenticationError) as exc:
        await AuthPipeline(tokens).authenticate(header, mock_uow)
    assert exc.value.error.code == "ACCOUNT_INACTIVE_OR_DELETED"


@pytest.mark.asyncio
async def test_soft_deleted_user_is_rejected(tokens, mock_uow, user):
    header = _header(tokens, user)
    user.deleted_at = datetime.utcnow()
    mock_uow.users.get_by_id.return_value = user

    with pytest.raises(AuthenticationError) as exc:
        await AuthPipeline(tokens).authenticate(header, mock_uow)
    assert exc.value.error.code == "ACCOUNT_INACTIVE_OR_DELETED"


@pytest.mark.asyncio
async def test_missing_user_is_rejected(tokens, mock_uow, user):
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(AuthenticationError) as exc:
        await AuthPipeline(tokens).authenticate(_header(tokens, user), mock_uow)
    assert exc.value.error.code == "ACCOUNT_INACTIVE_OR_DELETED"


@pytest.mark.asyncio
async def test_failure_short_circuits_later_stages(tokens, mock_uow):
    with pytest.raises(AuthenticationError):
        await AuthPipeline(tokens).authenticate("Token abc", mock_uow)

    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_optional_variant_yields_none_on_failure(tokens, mock_uow):
    assert await AuthPipeline(tokens).authenticate_optional(None, mock_uow) is None
    assert await AuthPipeline(tokens).authenticate_optional("Bearer junk", mock_uow) is None


@pytest.mark.asyncio
async def test_optional_variant_yields_principal_on_success(tokens, mock_uow, user):
    mock_uow.users.get_by_id.return_value = user

    principal = await AuthPipeline(tokens).authenticate_optional(_header(tokens, user), mock_uow)

    assert principal is not None
    assert principal.email == user.email


@pytest.mark.asyncio
async def test_optional_dependency_stores_principal_on_request(tokens, mock_uow, user):
    mock_uow.users.get_by_id.return_value = user
    request = SimpleNamespace(state=SimpleNamespace())

    principal = await get_optional_principal(
        request,
        authorization=_header(tokens, user),
        pipeline=AuthPipeline(tokens),
        uow=mock_uow,
    )

    assert principal.user_id == str(user.id)
    assert request.state.principal is principal


@pytest.mark.asyncio
async def test_optional_dependency_allows_anonymous(tokens, mock_uow):
    request = SimpleNamespace(state=SimpleNamespace())

    principal = await get_optional_principal(
        request, authorization=None, pipeline=AuthPipeline(tokens), uow=mock_uow
    )

    assert principal is None
    assert request.state.principal is None
