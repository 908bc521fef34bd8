"""
Cursor pagination over a newest-first ordering.

A cursor is an opaque, URL-safe token recording where the previous page
stopped and which listing (``scope``) issued it. Resumption is keyset-based:
the next page starts strictly after the last row returned, ordered by
``(created_at DESC, id DESC)``.
"""

import base64
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import and_, or_
from sqlalchemy.orm import Query

from app.services.exceptions import InvalidCursorError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CursorPosition(BaseModel):
    """Decoded cursor contents."""

    scope: str
    created_at: Optional[datetime] = None
    id: Optional[UUID] = None
    done: bool = False


@dataclass
class Page(Generic[T]):
    """A page of results plus the cursor for the next one."""

    items: list[T]
    cursor: str
    is_done: bool


def encode_cursor(position: CursorPosition) -> str:
    """Serialize a position into an opaque cursor string."""
    raw = position.model_dump_json().encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_cursor(cursor: str, scope: str) -> CursorPosition:
    """
    Decode a cursor and check that it belongs to ``scope``.

    Args:
        cursor: Opaque cursor from a previous page
        scope: Listing the caller is paging through

    Returns:
        Decoded position

    Raises:
        InvalidCursorError: If the cursor is malformed or was issued
            for a different listing
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        position = CursorPosition.model_validate_json(raw)
    except ValueError:
        raise InvalidCursorError("Malformed pagination cursor")

    if position.scope != scope:
        logger.warning(f"Rejected cursor for scope {position.scope!r} on listing {scope!r}")
        raise InvalidCursorError("Cursor was issued for a different listing")

    if not position.done and (position.created_at is None) != (position.id is None):
        raise InvalidCursorError("Malformed pagination cursor")

    return position


def paginate(
    query: Query,
    model: Any,
    scope: str,
    cursor: Optional[str],
    num_items: int,
) -> Page:
    """
    Fetch one page of ``query`` in newest-first order.

    Args:
        query: Filtered query over ``model``
        model: Mapped class with ``created_at`` and ``id`` columns
        scope: Name of the listing, bound into every issued cursor
        cursor: Cursor from the previous page, or None for the first page
        num_items: Maximum rows on this page

    Returns:
        Page of model instances

    Raises:
        InvalidCursorError: If the cursor cannot be used for this listing
    """
    position = decode_cursor(cursor, scope) if cursor else CursorPosition(scope=scope)

    if position.done:
        return Page(items=[], cursor=encode_cursor(position), is_done=True)

    if position.created_at is not None:
        query = query.filter(
            or_(
                model.created_at < position.created_at,
                and_(model.created_at == position.created_at, model.id < position.id),
            )
        )

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(num_items + 1)
        .all()
    )

    is_done = len(rows) <= num_items
    items = rows[:num_items]

    if items:
        last = items[-1]
        next_position = CursorPosition(
            scope=scope, created_at=last.created_at, id=last.id, done=is_done
        )
    else:
        next_position = CursorPosition(
            scope=scope, created_at=position.created_at, id=position.id, done=True
        )

    return Page(items=items, cursor=encode_cursor(next_position), is_done=is_done)
