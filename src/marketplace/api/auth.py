"""Bearer-token authentication for the HTTP surface.

Tokens are HS256 JWTs issued by the identity service with the claims
`{id, accountType, email}`. They arrive as `Authorization: Bearer <token>`
or in the `token` cookie.
"""

import os
from datetime import timedelta

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.errors import Forbidden, Unauthorized
from marketplace.shared.principal import Principal, Role
from marketplace.utils.timeutils import utcnow

_bearer = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "token"


def _secret() -> str:
    return os.getenv("JWT_SECRET", "change-me-in-production")


def _algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def issue_token(
    account_id: str, account_type: str, email: str | None = None, ttl: timedelta = timedelta(days=7)
) -> str:
    now = utcnow()
    claims = {
        "id": account_id,
        "accountType": account_type,
        "email": email,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(claims, _secret(), algorithm=_algorithm())


def decode_token(token: str) -> Principal:
    try:
        claims = jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except jwt.PyJWTError:
        raise Unauthorized("Invalid or expired token") from None

    account_id, account_type = claims.get("id"), claims.get("accountType")
    if not account_id or account_type not in {role.value for role in Role}:
        raise Unauthorized("Invalid token claims")
    return Principal(id=str(account_id), account_type=account_type, email=claims.get("email"))


async def get_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise Unauthorized("Unauthorized")
    return decode_token(token)


def require_roles(*roles: Role):
    """Dependency factory admitting only principals with one of `roles`."""
    allowed = {role.value for role in roles}

    async def _dependency(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.account_type not in allowed:
            raise Forbidden("Forbidden")
        return principal

    return _dependency
