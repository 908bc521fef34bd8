"""API dependencies for dependency injection."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.db.session import get_db
from app.schemas.identity import VerifiedIdentity
from app.services.change_feed import ChangeFeed, change_feed
from app.services.identity import IdentityVerifier
from app.services.recommendation_service import RecommendationService
from app.services.user_service import UserService
from app.services.exceptions import AuthenticationError

# Bearer token is optional; services decide what anonymous callers may do
security = HTTPBearer(auto_error=False)


def get_change_feed() -> ChangeFeed:
    """Get the process-wide change feed."""
    return change_feed


def get_identity_verifier(settings: Settings = Depends(get_settings)) -> IdentityVerifier:
    """Get identity verifier instance."""
    return IdentityVerifier(settings)


def get_user_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    feed: ChangeFeed = Depends(get_change_feed),
) -> UserService:
    """Get user service instance."""
    return UserService(db, settings, feed)


def get_recommendation_service(
    db: Session = Depends(get_db),
    feed: ChangeFeed = Depends(get_change_feed),
) -> RecommendationService:
    """Get recommendation service instance."""
    return RecommendationService(db, feed)


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Optional[VerifiedIdentity]:
    """
    Get the verified caller identity, if any.

    A missing token means an anonymous caller. A token that fails
    verification is rejected outright rather than treated as anonymous.

    Raises:
        HTTPException: If a token is present but invalid
    """
    if credentials is None:
        return None

    try:
        return verifier.verify_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
