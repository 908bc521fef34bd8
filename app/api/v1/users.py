"""User sync endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.dependencies import get_identity, get_user_service
from app.models.user import User
from app.schemas.identity import VerifiedIdentity
from app.schemas.user import UserResponse, UserSyncResponse, UserUpsert
from app.services.exceptions import AuthenticationError
from app.services.user_service import UserService

router = APIRouter()


@router.post(
    "/sync",
    response_model=UserSyncResponse,
    summary="Sync the signed-in user",
    description="""
    Create or refresh the caller's user record from their profile.

    Called by the client after every sign-in. The user is identified by the
    verified token subject, never by the request body. New users whose email
    is on the admin allow-list receive the admin role; existing users keep
    their role.
    """,
)
def sync_user(
    data: UserUpsert,
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Upsert the current user."""
    try:
        return user_service.upsert_user(identity, data)

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get(
    "/me",
    response_model=Optional[UserResponse],
    summary="Get current user",
    description="The caller's user record, or null when anonymous or not yet synced.",
)
def get_me(
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    user_service: UserService = Depends(get_user_service),
) -> Optional[User]:
    """Get current user information."""
    return user_service.get_current_user(identity)
