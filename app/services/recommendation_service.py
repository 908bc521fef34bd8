"""Recommendation service: the shelf's read and write handlers."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.genres import is_registered_genre
from app.models.recommendation import Recommendation, TITLE_MAX_LENGTH, BLURB_MAX_LENGTH
from app.models.user import User
from app.schemas.identity import VerifiedIdentity
from app.schemas.recommendation import RecommendationCreate
from app.services.authorization import can_delete, can_mutate_any, can_toggle_featured
from app.services.change_feed import ChangeFeed, change_feed as default_change_feed
from app.services.exceptions import (
    ForbiddenError,
    InvalidGenreError,
    RecommendationNotFoundError,
    UnauthenticatedError,
    UserNotSyncedError,
    ValidationFailedError,
)
from app.services.link_validator import validate_link
from app.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

COLLECTION = "recommendations"


class RecommendationService:
    """
    Service for the recommendation shelf.

    Every method is one unit of work against the session: checks run first,
    the write (if any) follows, and a single commit ends the operation.
    """

    def __init__(self, db: Session, change_feed: ChangeFeed = default_change_feed):
        """
        Initialize the recommendation service.

        Args:
            db: SQLAlchemy database session
            change_feed: Channel notified after committed changes
        """
        self.db = db
        self.change_feed = change_feed

    # Reads

    def list_latest(self, limit: int = 10) -> list[Recommendation]:
        """
        Most recent recommendations for the public feed.

        No authentication required.

        Args:
            limit: Maximum number of results

        Returns:
            Recommendations, newest first, with owners loaded
        """
        return (
            self._base_query()
            .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
            .limit(limit)
            .all()
        )

    def list_paged(
        self,
        identity: Optional[VerifiedIdentity],
        genre: Optional[str] = None,
        cursor: Optional[str] = None,
        num_items: int = 20,
    ) -> Page:
        """
        Page through the shelf, optionally filtered by genre.

        Args:
            identity: Verified caller identity
            genre: Registry genre value to filter on
            cursor: Cursor from the previous page
            num_items: Page size

        Returns:
            Page of recommendations

        Raises:
            UnauthenticatedError: If there is no verified identity
            InvalidGenreError: If genre is not in the registry
            InvalidCursorError: If the cursor belongs to another listing
        """
        self._require_identity(identity)

        query = self._base_query()
        scope = "all"

        if genre is not None:
            if not is_registered_genre(genre):
                raise InvalidGenreError(genre)
            query = query.filter(Recommendation.genre == genre)
            scope = f"genre:{genre}"

        return paginate(query, Recommendation, scope, cursor, num_items)

    def list_by_owner(
        self,
        identity: Optional[VerifiedIdentity],
        cursor: Optional[str] = None,
        num_items: int = 20,
    ) -> Page:
        """
        Page through the caller's own recommendations.

        Raises:
            UnauthenticatedError: If there is no verified identity
            UserNotSyncedError: If the caller has no user record
            InvalidCursorError: If the cursor belongs to another listing
        """
        user = self._resolve_user(identity)
        query = self._base_query().filter(Recommendation.owner_id == user.id)
        return paginate(query, Recommendation, f"owner:{user.id}", cursor, num_items)

    def list_featured(
        self,
        identity: Optional[VerifiedIdentity],
        cursor: Optional[str] = None,
        num_items: int = 20,
    ) -> Page:
        """
        Page through staff picks.

        Raises:
            UnauthenticatedError: If there is no verified identity
            InvalidCursorError: If the cursor belongs to another listing
        """
        self._require_identity(identity)
        query = self._base_query().filter(Recommendation.is_featured.is_(True))
        return paginate(query, Recommendation, "featured", cursor, num_items)

    # Writes

    def add(self, identity: Optional[VerifiedIdentity], data: RecommendationCreate) -> Recommendation:
        """
        Add a recommendation owned by the caller.

        Validation order: title, genre, link, blurb.

        Args:
            identity: Verified caller identity
            data: Recommendation fields

        Returns:
            Created Recommendation

        Raises:
            UnauthenticatedError: If there is no verified identity
            ValidationFailedError: If title or blurb is empty or too long
            InvalidGenreError: If genre is not in the registry
            MalformedURLError: If link is not an absolute URL
            DisallowedSchemeError: If link is not http or https
            UserNotSyncedError: If the caller has no user record
        """
        self._require_identity(identity)

        title = data.title.strip()
        if not title:
            raise ValidationFailedError("Title is required.", field="title")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationFailedError(
                f"Title must be {TITLE_MAX_LENGTH} characters or fewer.", field="title"
            )

        if not data.genre.strip():
            raise ValidationFailedError("Genre is required.", field="genre")
        if not is_registered_genre(data.genre):
            raise InvalidGenreError(data.genre)

        link = validate_link(data.link)

        blurb = data.blurb.strip()
        if not blurb:
            raise ValidationFailedError("Blurb is required.", field="blurb")
        if len(blurb) > BLURB_MAX_LENGTH:
            raise ValidationFailedError(
                f"Blurb must be {BLURB_MAX_LENGTH} characters or fewer.", field="blurb"
            )

        user = self._resolve_user(identity)

        recommendation = Recommendation(
            title=title,
            genre=data.genre,
            link=link,
            blurb=blurb,
            owner_id=user.id,
            is_featured=False,
        )

        self.db.add(recommendation)
        self.db.commit()
        self.db.refresh(recommendation)

        logger.info(f"User {user.id} added recommendation {recommendation.id}")
        self.change_feed.publish(COLLECTION, "created", recommendation.id)
        return recommendation

    def remove(self, identity: Optional[VerifiedIdentity], recommendation_id: UUID) -> None:
        """
        Delete a recommendation. Owners may delete their own; admins any.

        Raises:
            UnauthenticatedError: If there is no verified identity
            UserNotSyncedError: If the caller has no user record
            RecommendationNotFoundError: If the recommendation doesn't exist
            ForbiddenError: If the caller is neither owner nor admin
        """
        user = self._resolve_user(identity)
        recommendation = self._get_for_update(recommendation_id)

        if not can_delete(user, recommendation):
            logger.warning(f"User {user.id} denied delete of recommendation {recommendation_id}")
            raise ForbiddenError("Forbidden: you can only delete your own recommendations.")

        self.db.delete(recommendation)
        self.db.commit()

        logger.info(f"User {user.id} removed recommendation {recommendation_id}")
        self.change_feed.publish(COLLECTION, "deleted", recommendation_id)

    def toggle_featured(
        self, identity: Optional[VerifiedIdentity], recommendation_id: UUID
    ) -> Recommendation:
        """
        Flip the staff pick flag. Admin only.

        Raises:
            UnauthenticatedError: If there is no verified identity
            ForbiddenError: If the caller is not a synced admin
            RecommendationNotFoundError: If the recommendation doesn't exist
        """
        self._require_identity(identity)
        user = self._get_user(identity.subject)

        if user is None or not can_toggle_featured(user):
            logger.warning(f"Denied staff pick toggle on {recommendation_id} for {identity.subject}")
            raise ForbiddenError("Forbidden: Staff Pick is an admin-only action.")

        recommendation = self._get_for_update(recommendation_id)
        recommendation.is_featured = not recommendation.is_featured

        self.db.commit()
        self.db.refresh(recommendation)

        logger.info(
            f"User {user.id} set staff pick on {recommendation_id} to {recommendation.is_featured}"
        )
        self.change_feed.publish(COLLECTION, "updated", recommendation_id)
        return recommendation

    # Helpers

    def _base_query(self) -> Query:
        return self.db.query(Recommendation)

    def _get_for_update(self, recommendation_id: UUID) -> Recommendation:
        recommendation = (
            self.db.query(Recommendation)
            .filter(Recommendation.id == recommendation_id)
            .with_for_update(of=Recommendation)
            .first()
        )
        if not recommendation:
            raise RecommendationNotFoundError(recommendation_id)
        return recommendation

    def _get_user(self, external_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.external_id == external_id).first()

    def _require_identity(self, identity: Optional[VerifiedIdentity]) -> None:
        if not can_mutate_any(identity):
            raise UnauthenticatedError()

    def _resolve_user(self, identity: Optional[VerifiedIdentity]) -> User:
        self._require_identity(identity)
        user = self._get_user(identity.subject)
        if user is None:
            raise UserNotSyncedError(identity.subject)
        return user
