"""Pydantic schemas for users."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr, ConfigDict

from app.models.user import UserRole


class UserUpsert(BaseModel):
    """Profile attributes sent by the client on every sign-in."""

    name: str = Field(..., max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Primary email address")
    avatar_url: Optional[str] = Field(
        default=None,
        max_length=2048,
        description="Avatar image URL"
    )


class UserSyncResponse(BaseModel):
    """Schema for the sync result."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Internal user identifier")


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique user identifier")
    email: str = Field(..., description="User email address")
    name: str = Field(..., description="Display name")
    avatar_url: Optional[str] = Field(default=None, description="Avatar image URL")
    role: UserRole = Field(..., description="User role")
    created_at: datetime = Field(..., description="First sync timestamp")


class AuthorResponse(BaseModel):
    """Public subset of a user attached to each recommendation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar_url: Optional[str] = None
