"""
Organization billing summary.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.organizations.dependencies import UserMembership, get_user_membership
from app.features.organizations.models import Member
from app.features.permissions.abilities import AbilitySet
from app.features.permissions.dependencies import ensure_can, get_ability
from app.features.permissions.roles import Action, ResourceType, Role


SEAT_PRICE = 10

router = APIRouter(tags=["billing"])


class SeatsBilling(BaseModel):
    amount: int
    unit: int
    price: int


class BillingResponse(BaseModel):
    seats: SeatsBilling
    total: int


@router.get("/{slug}/billing", response_model=BillingResponse)
async def get_organization_billing(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)],
    ability: Annotated[AbilitySet, Depends(get_ability)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Seat-based billing: every member except BILLING users is a paid seat."""
    ensure_can(ability, Action.GET, ResourceType.BILLING,
               message="You're not allowed to get billing details from this organization.")

    result = await db.execute(
        select(func.count(Member.id)).where(
            Member.organization_id == user_membership.organization.id,
            Member.role != Role.BILLING
        )
    )
    seats = result.scalar_one()

    return BillingResponse(
        seats=SeatsBilling(amount=seats, unit=SEAT_PRICE, price=seats * SEAT_PRICE),
        total=seats * SEAT_PRICE,
    )
