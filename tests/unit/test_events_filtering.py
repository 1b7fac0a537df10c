"""Unit tests for event type filtering."""

from __future__ import annotations

import pytest

from ghactivity.events import Event, filter_events


@pytest.fixture
def feed() -> list[Event]:
    """Events of kinds A, B, A in feed order."""
    return [
        Event(type="PushEvent", created_at="2025-03-15T12:00:00Z"),
        Event(type="WatchEvent", created_at="2025-03-14T12:00:00Z"),
        Event(type="PushEvent", created_at="2025-03-13T12:00:00Z"),
    ]


def test_filter_keeps_matching_events_in_order(feed: list[Event]) -> None:
    """Matching events are returned in their original order."""
    result = filter_events(feed, "PushEvent")

    assert result == [feed[0], feed[2]]


def test_filter_with_absent_kind_is_empty(feed: list[Event]) -> None:
    """A kind missing from the feed yields no events."""
    assert filter_events(feed, "ForkEvent") == []


def test_filter_with_unknown_kind_is_permitted(feed: list[Event]) -> None:
    """Filtering by an unrecognised tag is not an error."""
    assert filter_events(feed, "NotARealEvent") == []


@pytest.mark.parametrize("event_filter", [None, ""])
def test_no_filter_returns_everything(
    feed: list[Event], event_filter: str | None
) -> None:
    """Without a filter the feed is returned unchanged."""
    assert filter_events(feed, event_filter) == feed


def test_filter_does_not_mutate_input(feed: list[Event]) -> None:
    """The input sequence is left untouched."""
    snapshot = list(feed)

    filter_events(feed, "WatchEvent")

    assert feed == snapshot


def test_filter_is_case_sensitive(feed: list[Event]) -> None:
    """Type tags must match exactly."""
    assert filter_events(feed, "pushevent") == []
