"""
Organization member routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.errors import BadRequestError, NotFoundError
from app.features.members.schemas import MemberResponse, MemberUpdate
from app.features.organizations.dependencies import UserMembership, get_user_membership
from app.features.organizations.models import Member, Organization
from app.features.permissions.abilities import AbilitySet
from app.features.permissions.dependencies import ensure_can, get_ability
from app.features.permissions.roles import Action, ResourceType
from app.utils import get_logger


log = get_logger(__name__)

router = APIRouter(tags=["members"])


async def _get_member(db: AsyncSession, organization: Organization, member_id: str) -> Member:
    result = await db.execute(
        select(Member).where(
            Member.id == member_id,
            Member.organization_id == organization.id
        )
    )
    member = result.scalar_one_or_none()

    if member is None:
        raise NotFoundError("Member not found")

    return member


@router.get("/{slug}/members", response_model=list[MemberResponse])
async def get_members(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get all organization members."""
    ensure_can(ability, Action.GET, ResourceType.USER,
               message="You're not allowed to see organization members.")

    result = await db.execute(
        select(Member)
        .where(Member.organization_id == user_membership.organization.id)
        .order_by(Member.role)
    )
    return [
        MemberResponse(
            id=member.id,
            user_id=member.user_id,
            role=member.role,
            name=member.user.name,
            email=member.user.email,
            avatar_url=member.user.avatar_url,
        )
        for member in result.scalars().all()
    ]


@router.put("/{slug}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_member(
    member_id: str,
    update_data: MemberUpdate,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Change a member's role."""
    ensure_can(ability, Action.UPDATE, ResourceType.USER,
               message="You're not allowed to update this member.")

    organization = user_membership.organization
    member = await _get_member(db, organization, member_id)

    if member.user_id == organization.owner_id:
        raise BadRequestError("The organization owner's role cannot be changed.")

    member.role = update_data.role
    await db.commit()
    log.info("Member %s of %s is now %s", member.id, organization.slug, member.role.value)


@router.delete("/{slug}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    member_id: str,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Remove a member from the organization."""
    ensure_can(ability, Action.DELETE, ResourceType.USER,
               message="You're not allowed to remove this member from organization.")

    organization = user_membership.organization
    member = await _get_member(db, organization, member_id)

    if member.user_id == organization.owner_id:
        raise BadRequestError("The organization owner cannot be removed.")

    await db.delete(member)
    await db.commit()
