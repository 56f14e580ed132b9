"""
Pydantic schemas for account and session requests and responses.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Schema for creating a new account."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        """E-mail addresses are stored and compared lowercase."""
        return v.lower()


class UserCreated(BaseModel):
    user_id: str


class PasswordSession(BaseModel):
    """Credentials for password authentication."""
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Schema for the current user's profile."""
    id: str
    name: str | None = None
    email: str
    avatar_url: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    """Public user information (limited fields)."""
    id: str
    name: str | None = None
    avatar_url: str | None = None

    model_config = {"from_attributes": True}
