"""
Pydantic schemas for invites.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator

from app.features.permissions.roles import Role
from app.features.users.schemas import UserPublic


class InviteCreate(BaseModel):
    email: EmailStr
    role: Role

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()


class InviteCreated(BaseModel):
    invite_id: str


class InviteOrganization(BaseModel):
    name: str
    slug: str

    model_config = {"from_attributes": True}


class InviteResponse(BaseModel):
    id: str
    email: str
    role: Role
    created_at: datetime
    author: Optional[UserPublic] = None

    model_config = {"from_attributes": True}


class InviteDetail(InviteResponse):
    """Invite as shown to its recipient."""
    organization: InviteOrganization
