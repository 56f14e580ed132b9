"""
FastAPI dependencies for authentication.
"""
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.errors import UnauthorizedError
from app.features.users.models import User
from app.features.users.auth import verify_jwt_token


security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> str:
    """
    Return the user id carried by the bearer token.

    Usage:
        @router.get("/things")
        async def list_things(user_id: str = Depends(get_current_user_id)):
            ...
    """
    if credentials is None:
        raise UnauthorizedError("Missing auth token")

    payload = verify_jwt_token(credentials.credentials)
    user_id = payload.get("sub")

    if not isinstance(user_id, str) or not user_id:
        raise UnauthorizedError("Invalid token payload")

    return user_id


async def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)]
) -> User:
    """Load the authenticated user; a token for a deleted account is rejected."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise UnauthorizedError("User not found")

    return user


def get_authorization_header(request) -> str:
    """
    Extract authorization header for rate limiting.
    Used with slowapi Limiter.
    """
    auth = request.headers.get("Authorization", "")
    return auth or "anonymous"
