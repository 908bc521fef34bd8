"""Pydantic schemas for recommendation endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, ConfigDict

from app.schemas.user import AuthorResponse


class RecommendationCreate(BaseModel):
    """
    Schema for adding a recommendation.

    Fields are plain strings here; length, genre and link rules are enforced
    by the service so every client gets the same messages.
    """

    title: str = Field(..., description="Title, 1-120 characters", examples=["Dune: Part Two"])
    genre: str = Field(..., description="Registry genre value", examples=["sci-fi"])
    link: str = Field(
        ...,
        description="http or https URL",
        examples=["https://letterboxd.com/film/dune-part-two/"]
    )
    blurb: str = Field(..., description="Short pitch, 1-300 characters")


class RecommendationCreated(BaseModel):
    """Schema returned after adding a recommendation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="New recommendation identifier")


class RecommendationResponse(BaseModel):
    """Schema for a recommendation with its author."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique recommendation identifier")
    title: str
    genre: str
    link: str
    blurb: str
    owner_id: UUID = Field(..., description="Owner user ID")
    is_featured: bool = Field(..., description="Staff pick flag")
    created_at: datetime
    author: Optional[AuthorResponse] = Field(
        default=None,
        validation_alias=AliasChoices("owner", "author"),
        description="Owner profile, null if the owner no longer exists"
    )


class RecommendationPage(BaseModel):
    """One page of a cursor-paginated listing."""

    items: list[RecommendationResponse]
    cursor: str = Field(..., description="Opaque cursor for the next page")
    is_done: bool = Field(..., description="True when no further pages exist")


class FeaturedToggleResponse(BaseModel):
    """Schema for the staff pick toggle result."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    is_featured: bool
