"""
Invite routes: organization-scoped management and recipient actions.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.errors import BadRequestError, NotFoundError
from app.features.invites.models import Invite
from app.features.invites.schemas import InviteCreate, InviteCreated, InviteResponse, InviteDetail
from app.features.organizations.dependencies import UserMembership, get_user_membership
from app.features.organizations.models import Member
from app.features.permissions.abilities import AbilitySet
from app.features.permissions.dependencies import ensure_can, get_ability
from app.features.permissions.roles import Action, ResourceType
from app.features.users.dependencies import get_current_user
from app.features.users.models import User
from app.utils import get_logger


log = get_logger(__name__)

router = APIRouter(tags=["invites"])


async def _get_invite(db: AsyncSession, invite_id: str) -> Invite:
    result = await db.execute(select(Invite).where(Invite.id == invite_id))
    invite = result.scalar_one_or_none()

    if invite is None:
        raise NotFoundError("Invite not found")

    return invite


def _ensure_recipient(invite: Invite, user: User):
    if invite.email != user.email:
        raise BadRequestError("This invite belongs to another user.")


@router.post(
    "/organizations/{slug}/invites",
    response_model=InviteCreated,
    status_code=status.HTTP_201_CREATED
)
async def create_invite(
    invite_data: InviteCreate,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Invite an e-mail address to join the organization."""
    ensure_can(ability, Action.CREATE, ResourceType.INVITE,
               message="You're not allowed to create new invites.")

    organization = user_membership.organization
    email = invite_data.email
    _, domain = email.split("@", 1)

    if organization.should_attach_users_by_domain and organization.domain == domain:
        raise BadRequestError(
            f'Users with "{domain}" domain will join your organization automatically on login.'
        )

    result = await db.execute(
        select(Invite).where(
            Invite.email == email,
            Invite.organization_id == organization.id
        )
    )
    if result.scalar_one_or_none() is not None:
        raise BadRequestError("Another invite with same e-mail already exists.")

    result = await db.execute(
        select(Member)
        .join(User, User.id == Member.user_id)
        .where(
            Member.organization_id == organization.id,
            User.email == email
        )
    )
    if result.scalar_one_or_none() is not None:
        raise BadRequestError("A member with this e-mail already belongs to your organization.")

    invite = Invite(
        email=email,
        role=invite_data.role,
        author_id=ability.subject.id,
        organization_id=organization.id,
    )
    db.add(invite)
    await db.commit()

    log.info("Invite %s to %s created in %s", invite.id, email, organization.slug)
    return InviteCreated(invite_id=invite.id)


@router.get("/organizations/{slug}/invites", response_model=list[InviteResponse])
async def get_invites(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get all organization invites, newest first."""
    ensure_can(ability, Action.GET, ResourceType.INVITE,
               message="You're not allowed to get organization invites.")

    result = await db.execute(
        select(Invite)
        .where(Invite.organization_id == user_membership.organization.id)
        .order_by(Invite.created_at.desc(), Invite.id.desc())
    )
    return result.scalars().all()


@router.post(
    "/organizations/{slug}/invites/{invite_id}/revoke",
    status_code=status.HTTP_204_NO_CONTENT
)
async def revoke_invite(
    invite_id: str,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Revoke an invite. Members may only revoke invites they sent."""
    result = await db.execute(
        select(Invite).where(
            Invite.id == invite_id,
            Invite.organization_id == user_membership.organization.id
        )
    )
    invite = result.scalar_one_or_none()

    if invite is None:
        raise NotFoundError("Invite not found")

    ensure_can(ability, Action.DELETE, ResourceType.INVITE, invite,
               message="You're not allowed to delete an invite.")

    await db.delete(invite)
    await db.commit()


@router.get("/invites/{invite_id}", response_model=InviteDetail)
async def get_invite(
    invite_id: str,
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get an invite by id (public)."""
    return await _get_invite(db, invite_id)


@router.get("/pending-invites", response_model=list[InviteDetail])
async def get_pending_invites(
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get invites addressed to the current user."""
    result = await db.execute(
        select(Invite)
        .where(Invite.email == user.email)
        .order_by(Invite.created_at.desc())
    )
    return result.scalars().all()


@router.post("/invites/{invite_id}/accept", status_code=status.HTTP_204_NO_CONTENT)
async def accept_invite(
    invite_id: str,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Accept an invite, joining the organization with the invited role."""
    invite = await _get_invite(db, invite_id)
    _ensure_recipient(invite, user)

    result = await db.execute(
        select(Member).where(
            Member.organization_id == invite.organization_id,
            Member.user_id == user.id
        )
    )
    if result.scalar_one_or_none() is None:
        db.add(Member(user_id=user.id, organization_id=invite.organization_id, role=invite.role))

    await db.delete(invite)
    await db.commit()
    log.info("User %s accepted invite %s", user.id, invite_id)


@router.post("/invites/{invite_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
async def reject_invite(
    invite_id: str,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Reject an invite."""
    invite = await _get_invite(db, invite_id)
    _ensure_recipient(invite, user)

    await db.delete(invite)
    await db.commit()
