"""Unit tests for feed event decoding."""

from __future__ import annotations

import pytest

from ghactivity.events import (
    PAYLOAD_TYPES,
    Event,
    EventKind,
    Repo,
    decode_event,
    decode_events,
    decode_payload,
    event_kind,
    is_known_event_kind,
)
from ghactivity.events.models import (
    Comment,
    CommitCommentPayload,
    PushPayload,
    Release,
    ReleasePayload,
)
from tests.helpers.feed_events import feed_event


def test_decode_event_keeps_envelope_fields() -> None:
    """Envelope fields decode and unknown fields are ignored."""
    event = decode_event(feed_event("WatchEvent", {"action": "started"}))

    assert event.type == "WatchEvent"
    assert event.repo_name == "octocat/Hello-World"
    assert event.created_at == "2025-03-15T12:00:00Z"
    assert event.payload == {"action": "started"}


def test_decode_event_tolerates_missing_fields() -> None:
    """Only the type tag is needed to build an event."""
    event = decode_event({"type": "PublicEvent"})

    assert event == Event(type="PublicEvent")
    assert event.repo_name is None
    assert event.payload == {}


@pytest.mark.parametrize(
    ("raw", "expected_type"),
    [
        pytest.param({"type": "PushEvent", "repo": "flat"}, "PushEvent", id="bad-repo"),
        pytest.param({"type": 42}, "", id="non-string-type"),
        pytest.param(["PushEvent"], "", id="not-an-object"),
        pytest.param(None, "", id="null"),
    ],
)
def test_decode_event_salvages_malformed_envelopes(
    raw: object, expected_type: str
) -> None:
    """Malformed entries still produce an event carrying any usable tag."""
    assert decode_event(raw).type == expected_type


def test_decode_event_null_payload_keeps_envelope() -> None:
    """A null payload is replaced while repo and date survive."""
    event = decode_event(
        {
            "type": "WatchEvent",
            "repo": {"name": "octocat/Spoon-Knife"},
            "created_at": "2025-03-15T00:00:00Z",
            "payload": None,
        }
    )

    assert event == Event(
        type="WatchEvent",
        repo=Repo(name="octocat/Spoon-Knife"),
        created_at="2025-03-15T00:00:00Z",
    )


def test_decode_event_bad_repo_keeps_other_fields() -> None:
    """A non-object repo does not discard the timestamp or payload."""
    event = decode_event(
        {
            "type": "ReleaseEvent",
            "repo": "flat",
            "created_at": "2025-03-15T00:00:00Z",
            "payload": {"release": {"name": "v1"}},
        }
    )

    assert event.repo_name is None
    assert event.created_at == "2025-03-15T00:00:00Z"
    assert decode_payload(ReleasePayload, event.payload).release == Release(
        name="v1"
    )


def test_decode_events_preserves_order() -> None:
    """Feed order is preserved."""
    raw = [feed_event("PushEvent"), feed_event("ForkEvent"), feed_event("PushEvent")]

    assert [event.type for event in decode_events(raw)] == [
        "PushEvent",
        "ForkEvent",
        "PushEvent",
    ]


def test_decode_payload_coerces_lax_scalars() -> None:
    """Numeric strings decode into integer fields."""
    payload = decode_payload(PushPayload, {"size": "4", "head": "abc"})

    assert payload.size == 4
    assert payload.commits is None


def test_decode_payload_drops_malformed_field() -> None:
    """A field of the wrong shape falls back to its default."""
    payload = decode_payload(ReleasePayload, {"release": ["v1"]})

    assert payload == ReleasePayload()


def test_decode_payload_keeps_well_formed_fields() -> None:
    """One malformed field does not discard its valid siblings."""
    payload = decode_payload(PushPayload, {"size": 2, "commits": "x"})

    assert payload == PushPayload(size=2)


def test_decode_payload_salvages_nested_fields() -> None:
    """Nested structures keep the leaves that validate."""
    payload = decode_payload(
        CommitCommentPayload,
        {"comment": {"body": "Looks good", "user": "octocat"}},
    )

    assert payload.comment == Comment(body="Looks good")


def test_decode_payload_of_wrong_type_is_empty() -> None:
    """A payload that is not an object decodes as the empty payload."""
    assert decode_payload(ReleasePayload, ["v1"]) == ReleasePayload()


def test_every_kind_has_a_payload_type() -> None:
    """The payload table covers the closed set of kinds."""
    assert set(PAYLOAD_TYPES) == set(EventKind)
    assert len(EventKind) == 17


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("PushEvent", EventKind.PUSH),
        ("WatchEvent", EventKind.WATCH),
        ("pushevent", None),
        ("DiscussionEvent", None),
    ],
)
def test_event_kind_lookup(tag: str, expected: EventKind | None) -> None:
    """Lookups are exact and case-sensitive."""
    assert event_kind(tag) is expected
    assert is_known_event_kind(tag) is (expected is not None)


def test_is_known_event_kind_rejects_none() -> None:
    """A missing filter is not a known kind."""
    assert is_known_event_kind(None) is False
