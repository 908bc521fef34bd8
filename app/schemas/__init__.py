"""Pydantic schemas for request/response validation."""

from app.schemas.identity import VerifiedIdentity
from app.schemas.user import (
    UserUpsert,
    UserSyncResponse,
    UserResponse,
    AuthorResponse,
)
from app.schemas.recommendation import (
    RecommendationCreate,
    RecommendationCreated,
    RecommendationResponse,
    RecommendationPage,
    FeaturedToggleResponse,
)
from app.schemas.genre import GenreResponse, GenreRegistryResponse
from app.schemas.link import LinkCheckRequest, LinkCheckResponse

__all__ = [
    "VerifiedIdentity",
    "UserUpsert",
    "UserSyncResponse",
    "UserResponse",
    "AuthorResponse",
    "RecommendationCreate",
    "RecommendationCreated",
    "RecommendationResponse",
    "RecommendationPage",
    "FeaturedToggleResponse",
    "GenreResponse",
    "GenreRegistryResponse",
    "LinkCheckRequest",
    "LinkCheckResponse",
]
