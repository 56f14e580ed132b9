"""
Organization feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.errors import BadRequestError
from app.features.users.dependencies import get_current_user_id
from app.features.organizations.models import Organization, Member
from app.features.organizations.schemas import (
    OrganizationCreate,
    OrganizationCreated,
    OrganizationUpdate,
    OrganizationResponse,
    OrganizationWithRole,
    MembershipResponse,
    TransferOwnership,
)
from app.features.organizations.dependencies import UserMembership, get_user_membership
from app.features.permissions.abilities import AbilitySet
from app.features.permissions.dependencies import ensure_can, get_ability
from app.features.permissions.roles import Action, ResourceType, Role
from app.utils import create_slug, get_logger


log = get_logger(__name__)

router = APIRouter(tags=["organizations"])


async def _ensure_domain_available(db: AsyncSession, domain: str | None, organization_id: str | None = None):
    if domain is None:
        return
    query = select(Organization).where(Organization.domain == domain)
    if organization_id is not None:
        query = query.where(Organization.id != organization_id)
    result = await db.execute(query)
    if result.scalar_one_or_none() is not None:
        raise BadRequestError("Another organization with same domain already exists.")


@router.post("/", response_model=OrganizationCreated, status_code=status.HTTP_201_CREATED)
async def create_organization(
    org_data: OrganizationCreate,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Create an organization; the creator becomes its owner and an ADMIN member."""
    await _ensure_domain_available(db, org_data.domain)

    slug = create_slug(org_data.name)
    if not slug:
        raise BadRequestError("Organization name must contain letters or digits.")

    result = await db.execute(select(Organization).where(Organization.slug == slug))
    if result.scalar_one_or_none() is not None:
        raise BadRequestError("Another organization with same name already exists.")

    organization = Organization(
        name=org_data.name,
        slug=slug,
        domain=org_data.domain,
        should_attach_users_by_domain=org_data.should_attach_users_by_domain,
        owner_id=user_id,
    )
    db.add(organization)
    await db.flush()

    db.add(Member(user_id=user_id, organization_id=organization.id, role=Role.ADMIN))
    await db.commit()

    log.info("Organization %s created by %s", organization.slug, user_id)
    return OrganizationCreated(organization_id=organization.id)


@router.get("/", response_model=list[OrganizationWithRole])
async def get_organizations(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get organizations where the current user is a member."""
    result = await db.execute(
        select(Organization, Member.role)
        .join(Member, Member.organization_id == Organization.id)
        .where(Member.user_id == user_id)
        .order_by(Organization.name)
    )
    return [
        OrganizationWithRole(
            id=organization.id,
            name=organization.name,
            slug=organization.slug,
            avatar_url=organization.avatar_url,
            role=role,
        )
        for organization, role in result.all()
    ]


@router.get("/{slug}", response_model=OrganizationResponse)
async def get_organization(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)]
):
    """Get organization details."""
    ensure_can(ability, Action.GET, ResourceType.ORGANIZATION,
               message="You're not allowed to see this organization.")
    return user_membership.organization


@router.get("/{slug}/membership", response_model=MembershipResponse)
async def get_membership(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)]
):
    """Get the current user's membership and what it allows."""
    membership = user_membership.membership
    return MembershipResponse(
        id=membership.id,
        role=membership.role,
        user_id=membership.user_id,
        organization_id=membership.organization_id,
        permissions=ability.rules(),
    )


@router.put("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def update_organization(
    update_data: OrganizationUpdate,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Update organization details (owner only)."""
    organization = user_membership.organization
    ensure_can(ability, Action.UPDATE, ResourceType.ORGANIZATION, organization,
               message="You're not allowed to update this organization.")

    await _ensure_domain_available(db, update_data.domain, organization.id)

    organization.name = update_data.name
    organization.domain = update_data.domain
    organization.should_attach_users_by_domain = update_data.should_attach_users_by_domain
    await db.commit()


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def shutdown_organization(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Shut down an organization, removing its members and invites."""
    organization = user_membership.organization
    ensure_can(ability, Action.DELETE, ResourceType.ORGANIZATION, organization,
               message="You're not allowed to shutdown this organization.")

    await db.delete(organization)
    await db.commit()
    log.info("Organization %s shut down by %s", organization.slug, ability.subject.id)


@router.patch("/{slug}/owner", status_code=status.HTTP_204_NO_CONTENT)
async def transfer_organization(
    transfer: TransferOwnership,
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Transfer ownership to another member, promoting them to ADMIN."""
    organization = user_membership.organization
    ensure_can(ability, Action.TRANSFER_OWNERSHIP, ResourceType.ORGANIZATION, organization,
               message="You're not allowed to transfer this organization ownership.")

    result = await db.execute(
        select(Member).where(
            Member.organization_id == organization.id,
            Member.user_id == transfer.transfer_to_user_id
        )
    )
    target_member = result.scalar_one_or_none()

    if target_member is None:
        raise BadRequestError("Target user is not a member of this organization.")

    target_member.role = Role.ADMIN
    organization.owner_id = target_member.user_id
    await db.commit()
    log.info("Organization %s transferred to %s", organization.slug, target_member.user_id)
