"""Event models, filtering and activity message formatting."""

from __future__ import annotations

from .filtering import filter_events
from .formatting import (
    UNKNOWN_ACTIVITY,
    capitalize_first,
    comment_preview,
    describe_event,
    format_activities,
    format_activity,
    format_event_date,
)
from .models import (
    PAYLOAD_TYPES,
    DisplayRecord,
    Event,
    EventKind,
    Repo,
    decode_event,
    decode_events,
    decode_payload,
    event_kind,
    is_known_event_kind,
)

__all__ = [
    "PAYLOAD_TYPES",
    "UNKNOWN_ACTIVITY",
    "DisplayRecord",
    "Event",
    "EventKind",
    "Repo",
    "capitalize_first",
    "comment_preview",
    "decode_event",
    "decode_events",
    "decode_payload",
    "describe_event",
    "event_kind",
    "filter_events",
    "format_activities",
    "format_activity",
    "format_event_date",
    "is_known_event_kind",
]
