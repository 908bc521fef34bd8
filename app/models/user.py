"""User model synced from the identity provider."""

import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import Column, String, DateTime, Enum, Uuid

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, PyEnum):
    """Closed set of user roles."""

    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User model keyed by the identity provider's subject.

    Profile fields are refreshed on every sync; the role is fixed at creation.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identity provider "sub" claim
    external_id = Column(String(255), unique=True, nullable=False, index=True)

    email = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    avatar_url = Column(String(2048), nullable=True)

    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.USER,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
