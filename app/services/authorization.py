"""Role and ownership predicates evaluated before every mutation."""

from typing import Optional

from app.models.recommendation import Recommendation
from app.models.user import User, UserRole
from app.schemas.identity import VerifiedIdentity


def can_mutate_any(identity: Optional[VerifiedIdentity]) -> bool:
    """Any verified caller may add and browse the shelf."""
    return identity is not None


def can_delete(user: User, recommendation: Recommendation) -> bool:
    """Owners may delete their own rows; admins may delete any row."""
    return recommendation.owner_id == user.id or user.role == UserRole.ADMIN


def can_toggle_featured(user: User) -> bool:
    """Only admins curate staff picks."""
    return user.role == UserRole.ADMIN
