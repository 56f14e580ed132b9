"""
Pydantic schemas for organization members.
"""
from typing import Optional
from pydantic import BaseModel

from app.features.permissions.roles import Role


class MemberResponse(BaseModel):
    id: str
    user_id: str
    role: Role
    name: Optional[str] = None
    email: str
    avatar_url: Optional[str] = None


class MemberUpdate(BaseModel):
    role: Role
