"""User directory service: identity sync and lookup."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models.user import User, UserRole
from app.schemas.identity import VerifiedIdentity
from app.schemas.user import UserUpsert
from app.services.change_feed import ChangeFeed, change_feed as default_change_feed
from app.services.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def parse_admin_emails(raw: str) -> set[str]:
    """Split a comma-separated allow-list into trimmed, lower-cased emails."""
    return {email.strip().lower() for email in raw.split(",") if email.strip()}


class UserService:
    """Service mapping verified identities to internal user records."""

    def __init__(
        self,
        db: Session,
        settings: Settings,
        change_feed: ChangeFeed = default_change_feed,
    ):
        """
        Initialize the user service.

        Args:
            db: SQLAlchemy database session
            settings: Application settings (admin allow-list source)
            change_feed: Channel notified after committed changes
        """
        self.db = db
        self.settings = settings
        self.change_feed = change_feed

    def upsert_user(self, identity: Optional[VerifiedIdentity], data: UserUpsert) -> User:
        """
        Create or refresh the caller's user record.

        The external id always comes from the verified identity. An existing
        record gets its profile fields refreshed and keeps its role; a new
        record gets ``admin`` if its email is on the allow-list. If another
        sync creates the record first, that record is refreshed instead.

        Args:
            identity: Verified caller identity
            data: Profile attributes from the client

        Returns:
            The created or updated User

        Raises:
            UnauthenticatedError: If there is no verified identity
        """
        if identity is None:
            raise UnauthenticatedError()

        user = self.get_user_by_external_id(identity.subject)

        if user:
            return self._refresh_profile(user, data)

        user = User(
            external_id=identity.subject,
            name=data.name,
            email=data.email,
            avatar_url=data.avatar_url,
            role=self._role_for(data.email),
        )

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # Another sync for the same subject committed first
            self.db.rollback()
            existing = self.get_user_by_external_id(identity.subject)
            if existing is None:
                raise
            logger.info(f"Concurrent sync for {identity.subject}, refreshing existing user")
            return self._refresh_profile(existing, data)

        self.db.refresh(user)

        logger.info(f"Created user {user.id} with role {user.role.value}")
        self.change_feed.publish("users", "created", user.id)
        return user

    def _refresh_profile(self, user: User, data: UserUpsert) -> User:
        user.name = data.name
        user.email = data.email
        user.avatar_url = data.avatar_url
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Refreshed profile for user {user.id}")
        return user

    def get_current_user(self, identity: Optional[VerifiedIdentity]) -> Optional[User]:
        """
        Get the caller's user record.

        Returns:
            User instance, or None if unauthenticated or not yet synced
        """
        if identity is None:
            return None
        return self.get_user_by_external_id(identity.subject)

    def get_user_by_external_id(self, external_id: str) -> Optional[User]:
        """
        Get user by identity provider subject.

        Args:
            external_id: Verified subject

        Returns:
            User instance or None
        """
        return self.db.query(User).filter(User.external_id == external_id).first()

    def admin_emails(self) -> set[str]:
        """Current admin allow-list, re-read from settings on each call."""
        return parse_admin_emails(self.settings.ADMIN_EMAILS)

    def _role_for(self, email: str) -> UserRole:
        if email.strip().lower() in self.admin_emails():
            return UserRole.ADMIN
        return UserRole.USER
