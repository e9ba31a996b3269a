"""
Access token handling.

User accounts live with an external identity provider; this service only
verifies the bearer token it issues and turns the claims into a
``Principal`` that routes pass explicitly into the service layer.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt

from landing_builder.config import settings
from landing_builder.constants.roles import RoleName
from landing_builder.exceptions import AuthenticationError, AuthorizationError, InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

# OAuth2 scheme for token extraction; missing tokens are reported by get_current_principal
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller: who they are, which tenant, which role."""

    user_id: str
    tenant_id: str
    role: RoleName


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Sign an access token.

    ``data`` must carry ``sub`` (user id), ``tenantId`` and ``role``.
    """
    to_encode = data.copy()
    for claim in ("sub", "tenantId", "role"):
        if claim not in to_encode:
            raise ValueError(f"Missing '{claim}' claim in token data.")

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_principal_token(principal: Principal, expires_delta: timedelta | None = None) -> str:
    return create_access_token(
        {"sub": principal.user_id, "tenantId": principal.tenant_id, "role": principal.role.value},
        expires_delta,
    )


def decode_access_token(token: str) -> Principal:
    """
    Verify a token and build the principal from its claims.

    Raises:
        TokenExpiredError: The token's ``exp`` is in the past
        InvalidTokenError: Bad signature, malformed token or missing claims
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError as e:
        logger.warning("Token expired")
        raise TokenExpiredError() from e
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidTokenError() from e

    user_id = payload.get("sub")
    tenant_id = payload.get("tenantId")
    role = payload.get("role")
    if not user_id or not tenant_id or not role:
        logger.warning("Token is missing required claims")
        raise InvalidTokenError("Token is missing required claims")

    try:
        role_name = RoleName(str(role).upper())
    except ValueError as e:
        raise InvalidTokenError(f"Unknown role '{role}'") from e

    return Principal(user_id=str(user_id), tenant_id=str(tenant_id), role=role_name)


async def get_current_principal(token: str | None = Depends(oauth2_scheme)) -> Principal:
    """FastAPI dependency resolving the bearer token to a Principal."""
    if not token:
        raise AuthenticationError("Not authenticated")
    return decode_access_token(token)


def require_role(allowed_roles: Iterable[RoleName]) -> Callable[..., Principal]:
    """Dependency factory admitting only principals holding one of ``allowed_roles``."""
    allowed = frozenset(allowed_roles)

    async def _principal_with_role(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            logger.warning(
                "Permission denied: user=%s tenant=%s role=%s",
                principal.user_id,
                principal.tenant_id,
                principal.role.value,
            )
            raise AuthorizationError(
                message=f"Role '{principal.role.value}' does not have access to this resource.",
                required_roles=sorted(role.value for role in allowed),
            )
        return principal

    return _principal_with_role
