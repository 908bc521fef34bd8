"""Tests for the change feed and SSE formatting."""

import uuid

from app.api.sse import format_comment, format_sse
from app.services.change_feed import ChangeFeed


class TestChangeFeed:
    def test_publish_reaches_subscribers(self):
        feed = ChangeFeed()
        received = []
        feed.subscribe(received.append)
        record_id = uuid.uuid4()

        event = feed.publish("recommendations", "created", record_id)

        assert received == [event]
        assert event.version == 1
        assert event.to_dict() == {
            "version": 1,
            "collection": "recommendations",
            "action": "created",
            "record_id": str(record_id),
        }

    def test_versions_increase(self):
        feed = ChangeFeed()
        versions = [feed.publish("recommendations", "updated").version for _ in range(3)]

        assert versions == [1, 2, 3]
        assert feed.version == 3

    def test_unsubscribe(self):
        feed = ChangeFeed()
        received = []
        unsubscribe = feed.subscribe(received.append)

        unsubscribe()
        unsubscribe()
        feed.publish("recommendations", "deleted")

        assert received == []
        assert feed.subscriber_count() == 0

    def test_failing_subscriber_is_isolated(self):
        feed = ChangeFeed()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        feed.subscribe(broken)
        feed.subscribe(received.append)

        event = feed.publish("recommendations", "created")

        assert received == [event]


class TestSseFormatting:
    def test_event_and_data(self):
        assert format_sse('{"version": 2}', event="change") == 'event: change\ndata: {"version": 2}\n\n'

    def test_multiline_data(self):
        assert format_sse("a\nb") == "data: a\ndata: b\n\n"

    def test_comment(self):
        assert format_comment("keep-alive") == ": keep-alive\n\n"
