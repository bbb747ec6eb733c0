from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from helpdesk.domain.entities import ROLE_VALUES, Role
from helpdesk.libs.result import Error

ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "

# Wire names of the identity claims; clients may decode tokens themselves
IDENTITY_CLAIMS = ("customerId", "role", "userId", "email")


class TokenError(Exception):
    code = "TOKEN_INVALID"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def error(self) -> Error:
        return Error(self.code, self.message)


class TokenExpired(TokenError):
    code = "TOKEN_EXPIRED"


class TokenInvalid(TokenError):
    code = "TOKEN_INVALID"


class TokenMalformed(TokenError):
    code = "TOKEN_MALFORMED"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int


def identity_claims(tenant_id: str, role: Role, user_id: str, email: str) -> Dict[str, str]:
    """Build the identity claim set embedded in both tokens"""
    return {
        "customerId": tenant_id,
        "role": Role(role).value,
        "userId": str(user_id),
        "email": email,
    }


class TokenService:
    """
    Issues and verifies access/refresh JWTs.

    Access and refresh tokens are signed with distinct secrets, so a token
    of one kind never verifies as the other. Pure: no I/O.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        issuer: str = "helpdesk-api",
        audience: str = "helpdesk-users",
    ):
        if access_secret == refresh_secret:
            raise ValueError("access and refresh secrets must differ")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_config(cls, config) -> "TokenService":
        return cls(
            access_secret=config.JWT_SECRET,
            refresh_secret=config.JWT_REFRESH_SECRET,
            access_ttl=timedelta(seconds=config.JWT_EXPIRES_IN),
            refresh_ttl=timedelta(seconds=config.JWT_REFRESH_EXPIRES_IN),
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
        )

    def _sign(self, claims: Dict[str, Any], secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {key: claims[key] for key in IDENTITY_CLAIMS}
        payload.update(
            {
                "iat": int(now.timestamp()),
                "exp": int((now + ttl).timestamp()),
                "iss": self.issuer,
                "aud": self.audience,
            }
        )
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def issue_access_token(self, claims: Dict[str, Any]) -> str:
        return self._sign(claims, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, claims: Dict[str, Any]) -> str:
        return self._sign(claims, self.refresh_secret, self.refresh_ttl)

    def issue_token_pair(self, claims: Dict[str, Any]) -> TokenPair:
        """
        Issue an access/refresh pair carrying the same identity claims.

        Args:
            claims: customerId, role, userId, email

        Returns:
            TokenPair whose expires_in is the access token's signed exp minus now
        """
        access_token = self.issue_access_token(claims)
        refresh_token = self.issue_refresh_token(claims)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.seconds_until_expiry(access_token),
        )

    def seconds_until_expiry(self, token: str) -> int:
        decoded = self.decode_unsafe(token) or {}
        exp = decoded.get("exp")
        if not isinstance(exp, int):
            return int(self.access_ttl.total_seconds())
        return max(0, exp - int(datetime.now(UTC).timestamp()))

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        return self._verify(token, self.access_secret)

    def verify_refresh_token(self, token: str) -> Dict[str, Any]:
        return self._verify(token, self.refresh_secret)

    def _verify(self, token: str, secret: str) -> Dict[str, Any]:
        unverified = self.decode_unsafe(token)
        if unverified is None:
            raise TokenMalformed("Malformed token")

        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token expired") from exc
        except JWTError as exc:
            # An expired token reports as expired even when its signature fails
            exp = unverified.get("exp")
            if isinstance(exp, int) and exp < int(datetime.now(UTC).timestamp()):
                raise TokenExpired("Token expired") from exc
            raise TokenInvalid("Invalid token") from exc

    @staticmethod
    def decode_unsafe(token: str) -> Optional[Dict[str, Any]]:
        """
        Decode claims WITHOUT verifying the signature.

        Only for best-effort logging; never for authorization decisions.
        """
        if not isinstance(token, str) or token.count(".") != 2:
            return None
        try:
            jwt.get_unverified_header(token)
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            return None
        return claims if isinstance(claims, dict) else None

    @staticmethod
    def extract_from_header(header: Optional[str]) -> Optional[str]:
        """Return the token of a 'Bearer <token>' header, else None"""
        if not header or not header.startswith(BEARER_PREFIX):
            return None
        token = header[len(BEARER_PREFIX):]
        return token or None

    @staticmethod
    def validate_claims_shape(payload: Any) -> bool:
        if not isinstance(payload, dict):
            return False
        for key in IDENTITY_CLAIMS:
            if not isinstance(payload.get(key), str):
                return False
        for key in ("iat", "exp"):
            value = payload.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                return False
        return payload["role"] in ROLE_VALUES


def has_role(role: Role, allowed: Iterable[Role]) -> bool:
    """Exact membership; SuperAdmin is not implied by Admin"""
    return role in tuple(allowed)


def is_admin(role: Role) -> bool:
    return role in (Role.admin, Role.super_admin)


def is_super_admin(role: Role) -> bool:
    return role == Role.super_admin
