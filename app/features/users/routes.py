"""
Account and session routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Request, status
from slowapi.util import get_remote_address
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import config
from app.core.database.engine import get_db
from app.core.errors import BadRequestError
from app.core.rate_limit import limiter
from app.features.users.models import User
from app.features.users.auth import hash_password, verify_password, create_access_token
from app.features.users.dependencies import get_current_user
from app.features.users.schemas import (
    UserCreate,
    UserCreated,
    UserResponse,
    PasswordSession,
    AccessToken,
)
from app.features.organizations.models import Organization, Member
from app.features.permissions.roles import Role
from app.utils import get_logger


log = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def create_account(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Create an account; joins the organization that auto-attaches the email domain."""
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none() is not None:
        raise BadRequestError("User with same e-mail already exists.")

    user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
    )
    db.add(user)
    await db.flush()

    _, domain = user_data.email.split("@", 1)
    result = await db.execute(
        select(Organization).where(
            Organization.domain == domain,
            Organization.should_attach_users_by_domain == True  # noqa: E712
        )
    )
    auto_join_organization = result.scalar_one_or_none()

    if auto_join_organization is not None:
        db.add(Member(user_id=user.id, organization_id=auto_join_organization.id, role=Role.MEMBER))
        log.info("User %s attached to organization %s by domain", user.id, auto_join_organization.slug)

    await db.commit()
    return UserCreated(user_id=user.id)


@router.post("/sessions/password", response_model=AccessToken, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.AUTH_RATE_LIMIT, key_func=get_remote_address)
async def authenticate_with_password(
    request: Request,
    credentials: PasswordSession,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Authenticate with e-mail and password."""
    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    if user is None:
        raise BadRequestError("Invalid credentials.")

    if user.password_hash is None:
        raise BadRequestError("User does not have a password, use social login.")

    if not verify_password(credentials.password, user.password_hash):
        raise BadRequestError("Invalid credentials.")

    return AccessToken(access_token=create_access_token(user.id))


@router.get("/users/me", response_model=UserResponse)
async def get_current_user_profile(
    user: Annotated[User, Depends(get_current_user)]
):
    """Get current authenticated user's profile."""
    return user
