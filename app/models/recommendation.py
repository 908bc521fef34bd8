"""Recommendation model."""

import uuid

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.user import _utcnow

TITLE_MAX_LENGTH = 120
BLURB_MAX_LENGTH = 300
LINK_MAX_LENGTH = 2048


class Recommendation(Base):
    """
    A single shelf item posted by a user.

    Title, genre, link and blurb are immutable after creation; only the
    featured ("staff pick") flag changes.
    """

    __tablename__ = "recommendations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    genre = Column(String(50), nullable=False, index=True)
    link = Column(String(LINK_MAX_LENGTH), nullable=False)
    blurb = Column(String(BLURB_MAX_LENGTH), nullable=False)

    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)

    # Creation order; every listing sorts on (created_at, id) descending
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    # Relationships
    owner = relationship("User", lazy="joined")

    __table_args__ = (
        Index("ix_recommendations_genre_created_at", "genre", "created_at"),
        Index("ix_recommendations_owner_created_at", "owner_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Recommendation(id={self.id}, genre={self.genre}, featured={self.is_featured})>"
