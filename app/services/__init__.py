"""Service layer for business logic."""

from app.services.recommendation_service import RecommendationService
from app.services.user_service import UserService
from app.services.identity import IdentityVerifier

__all__ = ["RecommendationService", "UserService", "IdentityVerifier"]
