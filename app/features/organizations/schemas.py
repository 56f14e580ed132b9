"""
Pydantic schemas for organization requests and responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.features.permissions.roles import Role


class OrganizationBase(BaseModel):
    name: str = Field(..., min_length=4, max_length=255)
    domain: Optional[str] = Field(None, max_length=255, description="E-mail domain, e.g. acme.com")
    should_attach_users_by_domain: bool = False

    @field_validator("domain")
    @classmethod
    def domain_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate a bare domain name, stored lowercase."""
        if v is None:
            return v
        v = v.strip().lower()
        labels = v.split(".")
        if len(labels) < 2 or not all(label.replace("-", "").isalnum() for label in labels):
            raise ValueError("Enter a valid domain (e.g. acme.com)")
        return v


class OrganizationCreate(OrganizationBase):
    """Schema for creating a new organization."""


class OrganizationUpdate(OrganizationBase):
    """Schema for updating an organization."""


class OrganizationCreated(BaseModel):
    organization_id: str


class OrganizationResponse(BaseModel):
    id: str
    name: str
    slug: str
    domain: Optional[str] = None
    should_attach_users_by_domain: bool
    avatar_url: Optional[str] = None
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrganizationWithRole(BaseModel):
    """An organization the current user belongs to, with their role in it."""
    id: str
    name: str
    slug: str
    avatar_url: Optional[str] = None
    role: Role


class PermissionRule(BaseModel):
    action: str
    resource: str
    ownership_required: bool


class MembershipResponse(BaseModel):
    id: str
    role: Role
    user_id: str
    organization_id: str
    permissions: List[PermissionRule] = []


class TransferOwnership(BaseModel):
    transfer_to_user_id: str = Field(..., min_length=1)
