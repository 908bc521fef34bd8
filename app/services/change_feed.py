"""In-process change notifications for live reads."""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A committed change to a collection."""

    version: int
    collection: str
    action: str
    record_id: Optional[UUID] = None

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "collection": self.collection,
            "action": self.action,
            "record_id": str(self.record_id) if self.record_id else None,
        }


Subscriber = Callable[[ChangeEvent], None]


class ChangeFeed:
    """
    Notification channel for committed mutations.

    Reads stay pure functions of store state; a subscriber only learns that
    something changed and re-runs its read. Publishing happens from request
    worker threads, so subscriber bookkeeping is lock-protected.
    """

    def __init__(self):
        self._subscribers: dict[int, Subscriber] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for future changes.

        Args:
            callback: Called with each ChangeEvent

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            subscription_id = next(self._ids)
            self._subscribers[subscription_id] = callback

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(subscription_id, None)

        return unsubscribe

    def publish(self, collection: str, action: str, record_id: Optional[UUID] = None) -> ChangeEvent:
        """
        Notify all subscribers of a committed change.

        A failing subscriber is logged and skipped.
        """
        with self._lock:
            self._version += 1
            event = ChangeEvent(
                version=self._version,
                collection=collection,
                action=action,
                record_id=record_id,
            )
            subscribers = list(self._subscribers.values())

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(f"Change subscriber failed for event {event.version}")

        return event

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)


change_feed = ChangeFeed()
