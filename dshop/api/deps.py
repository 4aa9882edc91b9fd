"""API dependencies for authentication and common operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dshop.core.exceptions import AuthenticationError, NotFoundError
from dshop.core.security import verify_token
from dshop.database import get_db
from dshop.models.user import User

# Security scheme; the legacy x-auth-token header is accepted as well
security = HTTPBearer(auto_error=False)


async def get_optional_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_auth_token: Annotated[str | None, Header(alias="x-auth-token")] = None,
) -> str | None:
    """Extract the raw credential from the request headers, if any."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return x_auth_token or None


async def get_token(
    token: Annotated[str | None, Depends(get_optional_token)],
) -> str:
    """Extract the raw credential, rejecting requests without one."""
    if not token:
        raise AuthenticationError("No token provided")
    return token


def user_id_from_payload(payload: dict) -> UUID:
    try:
        return UUID(str(payload["sub"]))
    except (KeyError, ValueError):
        raise AuthenticationError("Provided token is invalid")


async def get_current_user_id(
    token: Annotated[str, Depends(get_token)],
) -> UUID:
    """Verify the credential and return the user id it was issued for."""
    payload = verify_token(token, token_type="access")
    return user_id_from_payload(payload)


async def get_current_user(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the token."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError("User", str(user_id))

    return user


__all__ = [
    "get_db",
    "get_optional_token",
    "get_token",
    "user_id_from_payload",
    "get_current_user_id",
    "get_current_user",
]
