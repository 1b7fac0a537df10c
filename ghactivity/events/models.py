"""Typed structures for GitHub public feed events.

The feed is a JSON array of event envelopes. Each envelope carries a ``type``
tag and a ``payload`` whose shape depends on that tag. Envelopes decode into
:class:`Event`; payloads decode lazily into the per-kind structures listed in
:data:`PAYLOAD_TYPES`.

Every payload field is optional. The feed omits fields freely (GitHub has
dropped ``size`` and ``commits`` from push payloads, for example), so a
missing value is ``None`` and the formatter decides how to render it.
"""

from __future__ import annotations

import dataclasses
import enum
import types
import typing as typ

import msgspec
import msgspec.structs

from ghactivity.logging import get_logger, log_warning

logger = get_logger(__name__)


class EventKind(enum.StrEnum):
    """Event types with a dedicated activity message."""

    PUSH = "PushEvent"
    CREATE = "CreateEvent"
    PUBLIC = "PublicEvent"
    COMMIT_COMMENT = "CommitCommentEvent"
    DELETE = "DeleteEvent"
    MEMBER = "MemberEvent"
    FORK = "ForkEvent"
    GOLLUM = "GollumEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    ISSUES = "IssuesEvent"
    PULL_REQUEST_REVIEW = "PullRequestReviewEvent"
    PULL_REQUEST = "PullRequestEvent"
    PULL_REQUEST_REVIEW_COMMENT = "PullRequestReviewCommentEvent"
    PULL_REQUEST_REVIEW_THREAD = "PullRequestReviewThreadEvent"
    RELEASE = "ReleaseEvent"
    SPONSORSHIP = "SponsorshipEvent"
    WATCH = "WatchEvent"


_KINDS_BY_TAG: dict[str, EventKind] = {kind.value: kind for kind in EventKind}


def event_kind(tag: str) -> EventKind | None:
    """Return the :class:`EventKind` for ``tag``, or ``None`` when unknown."""
    return _KINDS_BY_TAG.get(tag)


def is_known_event_kind(tag: str | None) -> bool:
    """Return True when ``tag`` names one of the known event kinds."""
    return tag is not None and tag in _KINDS_BY_TAG


class Repo(msgspec.Struct, kw_only=True):
    """Repository reference on an event envelope."""

    name: str | None = None


class Event(msgspec.Struct, kw_only=True, frozen=True):
    """One entry of a user's public event feed.

    Attributes
    ----------
    type : str
        Event type tag, e.g. ``PushEvent``. Unknown tags are kept verbatim.
    repo : Repo
        Repository the event happened in.
    created_at : str, optional
        ISO-8601 creation timestamp as sent by GitHub.
    payload : dict[str, Any]
        Kind-specific payload, decoded on demand with :func:`decode_payload`.

    """

    type: str = ""
    repo: Repo = msgspec.field(default_factory=Repo)
    created_at: str | None = None
    payload: dict[str, typ.Any] = msgspec.field(default_factory=dict)

    @property
    def repo_name(self) -> str | None:
        """Return the ``owner/name`` slug of the event's repository."""
        return self.repo.name


@dataclasses.dataclass(frozen=True, slots=True)
class DisplayRecord:
    """Rendered form of one event, ready for presentation."""

    action: str
    detail: str
    date: str


class Actor(msgspec.Struct, kw_only=True):
    """GitHub account reference."""

    login: str | None = None


class Comment(msgspec.Struct, kw_only=True):
    """Issue, commit or review comment."""

    body: str | None = None
    user: Actor | None = None
    pull_request_url: str | None = None


class Issue(msgspec.Struct, kw_only=True):
    """Issue reference."""

    number: int | None = None
    title: str | None = None


class PullRequest(msgspec.Struct, kw_only=True):
    """Pull request reference."""

    number: int | None = None
    title: str | None = None
    merged: bool | None = None


class Review(msgspec.Struct, kw_only=True):
    """Pull request review."""

    state: str | None = None


class ReviewThread(msgspec.Struct, kw_only=True):
    """Pull request review thread."""

    comments: list[Comment] = msgspec.field(default_factory=list)


class ForkedRepository(msgspec.Struct, kw_only=True):
    """Repository created by a fork."""

    full_name: str | None = None


class WikiPage(msgspec.Struct, kw_only=True):
    """Wiki page touched by a Gollum event."""

    action: str | None = None
    title: str | None = None


class Release(msgspec.Struct, kw_only=True):
    """Published release."""

    name: str | None = None
    tag_name: str | None = None


class PushPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PushEvent``."""

    size: int | None = None
    commits: list[typ.Any] | None = None


class CreatePayload(msgspec.Struct, kw_only=True):
    """Payload of ``CreateEvent``."""

    ref: str | None = None
    ref_type: str | None = None


class DeletePayload(msgspec.Struct, kw_only=True):
    """Payload of ``DeleteEvent``."""

    ref: str | None = None
    ref_type: str | None = None


class PublicPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PublicEvent`` (GitHub sends an empty object)."""


class CommitCommentPayload(msgspec.Struct, kw_only=True):
    """Payload of ``CommitCommentEvent``."""

    comment: Comment | None = None


class IssueCommentPayload(msgspec.Struct, kw_only=True):
    """Payload of ``IssueCommentEvent``."""

    issue: Issue | None = None
    comment: Comment | None = None


class IssuesPayload(msgspec.Struct, kw_only=True):
    """Payload of ``IssuesEvent``."""

    action: str | None = None
    issue: Issue | None = None


class MemberPayload(msgspec.Struct, kw_only=True):
    """Payload of ``MemberEvent``."""

    action: str | None = None
    member: Actor | None = None


class ForkPayload(msgspec.Struct, kw_only=True):
    """Payload of ``ForkEvent``."""

    forkee: ForkedRepository | None = None


class GollumPayload(msgspec.Struct, kw_only=True):
    """Payload of ``GollumEvent``."""

    pages: list[WikiPage] = msgspec.field(default_factory=list)


class PullRequestPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PullRequestEvent``."""

    action: str | None = None
    number: int | None = None
    pull_request: PullRequest | None = None


class PullRequestReviewPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PullRequestReviewEvent``."""

    review: Review | None = None
    pull_request: PullRequest | None = None


class PullRequestReviewCommentPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PullRequestReviewCommentEvent``."""

    pull_request: PullRequest | None = None


class PullRequestReviewThreadPayload(msgspec.Struct, kw_only=True):
    """Payload of ``PullRequestReviewThreadEvent``."""

    action: str | None = None
    thread: ReviewThread | None = None


class ReleasePayload(msgspec.Struct, kw_only=True):
    """Payload of ``ReleaseEvent``."""

    action: str | None = None
    release: Release | None = None


class SponsorshipPayload(msgspec.Struct, kw_only=True):
    """Payload of ``SponsorshipEvent``."""

    action: str | None = None


class WatchPayload(msgspec.Struct, kw_only=True):
    """Payload of ``WatchEvent`` (GitHub only sends ``action: started``)."""


PAYLOAD_TYPES: dict[EventKind, type[msgspec.Struct]] = {
    EventKind.PUSH: PushPayload,
    EventKind.CREATE: CreatePayload,
    EventKind.PUBLIC: PublicPayload,
    EventKind.COMMIT_COMMENT: CommitCommentPayload,
    EventKind.DELETE: DeletePayload,
    EventKind.MEMBER: MemberPayload,
    EventKind.FORK: ForkPayload,
    EventKind.GOLLUM: GollumPayload,
    EventKind.ISSUE_COMMENT: IssueCommentPayload,
    EventKind.ISSUES: IssuesPayload,
    EventKind.PULL_REQUEST_REVIEW: PullRequestReviewPayload,
    EventKind.PULL_REQUEST: PullRequestPayload,
    EventKind.PULL_REQUEST_REVIEW_COMMENT: PullRequestReviewCommentPayload,
    EventKind.PULL_REQUEST_REVIEW_THREAD: PullRequestReviewThreadPayload,
    EventKind.RELEASE: ReleasePayload,
    EventKind.SPONSORSHIP: SponsorshipPayload,
    EventKind.WATCH: WatchPayload,
}


def _nested_struct(field_type: object) -> type[msgspec.Struct] | None:
    """Return the struct class behind ``S`` or ``S | None``, if any."""
    candidates: tuple[object, ...] = (field_type,)
    if typ.get_origin(field_type) in (typ.Union, types.UnionType):
        candidates = typ.get_args(field_type)
    for candidate in candidates:
        if isinstance(candidate, type) and issubclass(candidate, msgspec.Struct):
            return candidate
    return None


def _convert_field_by_field[S: msgspec.Struct](
    struct_type: type[S], raw: object
) -> S:
    """Build ``struct_type`` from the fields of ``raw`` that validate.

    Fields that fail validation keep their defaults. Nested structs are
    rebuilt the same way, so one bad leaf only blanks that leaf.
    """
    if not isinstance(raw, dict):
        return struct_type()
    values: dict[str, typ.Any] = {}
    for field in msgspec.structs.fields(struct_type):
        if field.encode_name not in raw:
            continue
        value = raw[field.encode_name]
        try:
            values[field.name] = msgspec.convert(value, type=field.type, strict=False)
        except msgspec.ValidationError:
            nested = _nested_struct(field.type)
            if nested is not None and isinstance(value, dict):
                values[field.name] = _convert_field_by_field(nested, value)
    return struct_type(**values)


def _convert_leniently[S: msgspec.Struct](
    struct_type: type[S], raw: object, label: str
) -> S:
    try:
        return msgspec.convert(raw, type=struct_type, strict=False)
    except msgspec.ValidationError as exc:
        log_warning(logger, "Dropping malformed fields of %s: %s", label, exc)
        return _convert_field_by_field(struct_type, raw)


def decode_payload[P: msgspec.Struct](payload_type: type[P], raw: object) -> P:
    """Decode a raw payload into ``payload_type``.

    Fields of the wrong shape are logged and left at their defaults while the
    well-formed fields are kept, so every event can still be formatted.
    """
    return _convert_leniently(payload_type, raw, payload_type.__name__)


def decode_event(raw: object) -> Event:
    """Decode one raw feed entry into an :class:`Event`.

    Unknown fields are ignored. Envelope fields of the wrong shape (a ``null``
    payload, a non-object repo, a non-string type) fall back to their
    defaults without discarding the rest of the entry.
    """
    return _convert_leniently(Event, raw, "event envelope")


def decode_events(raw_events: typ.Iterable[object]) -> list[Event]:
    """Decode every entry of a raw feed, preserving order."""
    return [decode_event(raw) for raw in raw_events]
