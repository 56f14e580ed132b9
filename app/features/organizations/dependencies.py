"""
Organization-related dependency injection functions.
"""
from typing import Annotated, NamedTuple
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.errors import NotFoundError
from app.features.users.dependencies import get_current_user_id
from app.features.organizations.models import Organization, Member


class UserMembership(NamedTuple):
    membership: Member
    organization: Organization


async def get_organization_by_slug(db: AsyncSession, slug: str) -> Organization:
    """
    Get organization by slug or raise NotFoundError.
    """
    result = await db.execute(
        select(Organization).where(Organization.slug == slug)
    )
    organization = result.scalar_one_or_none()

    if organization is None:
        raise NotFoundError("Organization not found")

    return organization


async def get_user_membership(
    slug: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)]
) -> UserMembership:
    """
    Get the organization addressed by ``slug`` and the current user's membership in it.

    Raises:
        NotFoundError: if the organization does not exist or the user is not a member
    """
    organization = await get_organization_by_slug(db, slug)

    result = await db.execute(
        select(Member).where(
            Member.organization_id == organization.id,
            Member.user_id == user_id
        )
    )
    membership = result.scalar_one_or_none()

    if membership is None:
        raise NotFoundError("You're not a member of this organization")

    return UserMembership(membership=membership, organization=organization)
