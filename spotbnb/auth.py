"""
SpotBnB Backend — Bearer Token Authentication
===============================================

What:  Issues and verifies signed access tokens and resolves them into the
       authenticated user for the current request.
Why:   Mutating spot routes must know who is calling so ownership can be
       checked. The user context is an immutable per-request value returned
       by a FastAPI dependency; nothing is stored in module state.
How:   HS256 JWT (PyJWT) signed with settings.jwt_secret. `sub` holds the
       user id. The token is read from `Authorization: Bearer <token>` and,
       failing that, from a `token` cookie.

Usage in a route:
    @router.post("/spots")
    async def create_spot(user: AuthUser = Depends(get_current_user)):
        ...

Failure modes (all → 401 {"message": "Authentication required"}):
    - No credential sent
    - Bad signature, malformed token, or expired token
    - Token for a user that no longer exists
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from spotbnb.config import settings
from spotbnb.database import get_db_session
from spotbnb.exceptions import AuthenticationError
from spotbnb.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False: we raise our own AuthenticationError so the response
# body matches every other error ({"message": ...})
bearer_scheme = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "token"

# users.id is a 32-bit INTEGER column
MAX_USER_ID = 2**31 - 1


class AuthUser(BaseModel):
    """The authenticated caller. Frozen: handlers may read it, never change it."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    username: str
    first_name: str
    last_name: str


def create_access_token(user_id: int, expires_in: Optional[int] = None) -> str:
    """Signs a token for `user_id`, valid for `expires_in` seconds."""
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else settings.jwt_expires_in
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Returns the user id carried by a valid token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        user_id = int(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(context={"reason": "expired"})
    except (jwt.InvalidTokenError, ValueError):
        raise AuthenticationError(context={"reason": "invalid"})

    if not 1 <= user_id <= MAX_USER_ID:
        raise AuthenticationError(context={"reason": "invalid"})
    return user_id


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> AuthUser:
    """
    FastAPI dependency resolving the request's credential into an AuthUser.

    Runs before body validation, so unauthenticated callers get 401 even
    when their payload is also invalid.
    """
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise AuthenticationError(context={"reason": "missing"})

    user_id = decode_access_token(token)
    user = await db.get(User, user_id)
    if user is None:
        logger.warning("Token presented for unknown user %s", user_id)
        raise AuthenticationError(context={"reason": "unknown_user", "user_id": user_id})

    return AuthUser(
        id=user.id,
        email=user.email,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
    )
