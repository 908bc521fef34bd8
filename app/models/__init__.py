"""Database models."""

from app.models.user import User, UserRole
from app.models.recommendation import Recommendation

__all__ = ["User", "UserRole", "Recommendation"]
