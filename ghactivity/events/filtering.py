"""Event type filtering for the activity feed.

Filtering is permissive: a filter naming an event type outside the known
kinds is not rejected, it simply matches nothing.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .models import Event


def filter_events(
    events: typ.Sequence[Event], event_filter: str | None = None
) -> list[Event]:
    """Return the events whose type equals ``event_filter``.

    Parameters
    ----------
    events
        Decoded feed events in feed order.
    event_filter
        Event type tag to keep. ``None`` or an empty string keeps every event.

    Returns
    -------
    list[Event]
        Matching events in their original order; possibly empty.

    Examples
    --------
    >>> from ghactivity.events.models import Event
    >>> feed = [Event(type="PushEvent"), Event(type="WatchEvent")]
    >>> [event.type for event in filter_events(feed, "WatchEvent")]
    ['WatchEvent']

    """
    if not event_filter:
        return list(events)
    return [event for event in events if event.type == event_filter]
