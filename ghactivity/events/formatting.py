"""Activity messages for GitHub feed events.

Each known event kind has a formatter that turns its typed payload into an
``(action, detail)`` pair. The mapping is closed: kinds outside
:class:`~ghactivity.events.models.EventKind` become "Unknown Activity" records
that echo the raw type tag.

Missing payload fields never raise. A missing scalar renders as an empty
fragment and a missing list renders as no items; the detail is stripped of the
whitespace such gaps leave behind.

Examples
--------
>>> import datetime as dt
>>> from ghactivity.events.models import Event, Repo
>>> event = Event(
...     type="WatchEvent",
...     repo=Repo(name="octocat/Spoon-Knife"),
...     created_at="2025-03-15T12:00:00Z",
... )
>>> format_activity(event, tz=dt.UTC)
DisplayRecord(action='Starred Repository', detail='octocat/Spoon-Knife', date='03/15/2025')

"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ

from ghactivity.logging import get_logger, log_debug

from .models import (
    PAYLOAD_TYPES,
    CommitCommentPayload,
    CreatePayload,
    DeletePayload,
    DisplayRecord,
    EventKind,
    ForkPayload,
    GollumPayload,
    IssueCommentPayload,
    IssuesPayload,
    MemberPayload,
    PublicPayload,
    PullRequestPayload,
    PullRequestReviewCommentPayload,
    PullRequestReviewPayload,
    PullRequestReviewThreadPayload,
    PushPayload,
    ReleasePayload,
    SponsorshipPayload,
    WatchPayload,
    decode_payload,
    event_kind,
)

if typ.TYPE_CHECKING:
    from .models import Comment, Event

logger = get_logger(__name__)

UNKNOWN_ACTIVITY = "Unknown Activity"

COMMENT_PREVIEW_LIMIT = 50
_COMMENT_PREVIEW_KEEP = 47
_ELLIPSIS = "..."

_DATE_FORMAT = "%m/%d/%Y"


def _text(value: object) -> str:
    """Render an optional scalar, mapping ``None`` to an empty fragment."""
    return "" if value is None else str(value)


def capitalize_first(value: str | None) -> str:
    """Uppercase the first character and leave the rest untouched.

    Unlike :meth:`str.capitalize`, the tail keeps its case.

    >>> capitalize_first("ready_for_review")
    'Ready_for_review'
    >>> capitalize_first(None)
    ''
    """
    text = value or ""
    return text[:1].upper() + text[1:]


def comment_preview(body: str | None) -> str:
    """Shorten a comment body for single-line display.

    Bodies longer than 50 characters are cut to their first 47 characters
    followed by ``...``; shorter bodies are returned verbatim.
    Length is counted in code points, so an emoji is one character.

    >>> comment_preview("x" * 51)[-5:]
    'xx...'
    >>> len(comment_preview("x" * 51))
    50
    """
    text = body or ""
    if len(text) > COMMENT_PREVIEW_LIMIT:
        return f"{text[:_COMMENT_PREVIEW_KEEP]}{_ELLIPSIS}"
    return text


def _comment_body(comment: Comment | None) -> str | None:
    return comment.body if comment else None


def format_event_date(created_at: str | None, *, tz: dt.tzinfo | None = None) -> str:
    """Render a GitHub timestamp as ``MM/DD/YYYY``.

    The timestamp is converted to ``tz``, or to the local timezone when
    ``tz`` is ``None``. Missing or unparseable timestamps render as ``""``.
    """
    if not created_at:
        return ""
    try:
        parsed = dt.datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        log_debug(logger, "Unparseable event timestamp: %r", created_at)
        return ""
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(tz).strftime(_DATE_FORMAT)


def _push(payload: PushPayload, repo: str) -> tuple[str, str]:
    size = payload.size
    if size is None and payload.commits is not None:
        size = len(payload.commits)
    noun = "commit" if size == 1 else "commits"
    return "Pushed Commits", f"{_text(size)} {noun} to {repo}"


def _create(payload: CreatePayload, repo: str) -> tuple[str, str]:
    if payload.ref_type == "branch":
        return "Created Branch", f"'{_text(payload.ref)}' in {repo}"
    if payload.ref_type == "tag":
        return "Created Tag", f"'{_text(payload.ref)}' in {repo}"
    return "Created Repository", repo


def _issue_comment(payload: IssueCommentPayload, repo: str) -> tuple[str, str]:
    del repo
    number = payload.issue.number if payload.issue else None
    preview = comment_preview(_comment_body(payload.comment))
    return "Issue Comment", f'#{_text(number)}: "{preview}"'


def _pull_request(payload: PullRequestPayload, repo: str) -> tuple[str, str]:
    del repo
    pull_request = payload.pull_request
    if payload.action == "closed":
        verb = "Merged" if pull_request and pull_request.merged else "Closed"
    else:
        verb = capitalize_first(payload.action)
    title = pull_request.title if pull_request else None
    return (
        f"{verb} Pull Request",
        f'#{_text(payload.number)}: "{_text(title)}"',
    )


def _public(payload: PublicPayload, repo: str) -> tuple[str, str]:
    del payload
    return "Made Public", repo


def _commit_comment(payload: CommitCommentPayload, repo: str) -> tuple[str, str]:
    del repo
    comment = payload.comment
    login = comment.user.login if comment and comment.user else None
    preview = comment_preview(_comment_body(comment))
    return "Commit Comment", f'by {_text(login)}: "{preview}"'


def _delete(payload: DeletePayload, repo: str) -> tuple[str, str]:
    return (
        "Deleted",
        f"{_text(payload.ref_type)} '{_text(payload.ref)}' from {repo}",
    )


def _member(payload: MemberPayload, repo: str) -> tuple[str, str]:
    if payload.action == "edited":
        action = "Updated Permissions"
    else:
        action = f"{capitalize_first(payload.action)} Collaborator"
    login = payload.member.login if payload.member else None
    return action, f"{_text(login)} in {repo}"


def _fork(payload: ForkPayload, repo: str) -> tuple[str, str]:
    del repo
    full_name = payload.forkee.full_name if payload.forkee else None
    return "Forked Repository", f"to {_text(full_name)}"


def _gollum(payload: GollumPayload, repo: str) -> tuple[str, str]:
    del repo
    pages = ", ".join(
        f"{_text(page.action)} {_text(page.title)}".strip() for page in payload.pages
    )
    return "Wiki Updates", pages


def _issues(payload: IssuesPayload, repo: str) -> tuple[str, str]:
    del repo
    verb = capitalize_first((payload.action or "").removesuffix("ed"))
    issue = payload.issue
    number = issue.number if issue else None
    title = issue.title if issue else None
    return f"{verb} Issue", f'#{_text(number)}: "{_text(title)}"'


def _pull_request_review(
    payload: PullRequestReviewPayload, repo: str
) -> tuple[str, str]:
    del repo
    number = payload.pull_request.number if payload.pull_request else None
    state = payload.review.state if payload.review else None
    review_state = _text(state).replace("_", " ")
    return "PR Review", f"#{_text(number)} ({review_state})"


def _pull_request_review_comment(
    payload: PullRequestReviewCommentPayload, repo: str
) -> tuple[str, str]:
    del repo
    number = payload.pull_request.number if payload.pull_request else None
    return "PR Comment", f"#{_text(number)}"


def _pull_request_review_thread(
    payload: PullRequestReviewThreadPayload, repo: str
) -> tuple[str, str]:
    del repo
    verb = "Resolved" if payload.action == "resolved" else "Unresolved"
    comments = payload.thread.comments if payload.thread else []
    url = comments[0].pull_request_url if comments else None
    # pull_request_url ends with the PR number: .../repos/{owner}/{repo}/pulls/{n}
    number = _text(url).rsplit("/", 1)[-1]
    return f"{verb} Thread", f"PR #{number}"


def _release(payload: ReleasePayload, repo: str) -> tuple[str, str]:
    del repo
    release = payload.release
    label = (release.name or release.tag_name) if release else None
    return f"{capitalize_first(payload.action)} Release", _text(label)


def _sponsorship(payload: SponsorshipPayload, repo: str) -> tuple[str, str]:
    del repo
    return "Sponsorship", _text(payload.action).replace("_", " ")


def _watch(payload: WatchPayload, repo: str) -> tuple[str, str]:
    del payload
    return "Starred Repository", repo


_Formatter = cabc.Callable[[typ.Any, str], tuple[str, str]]

_FORMATTERS: dict[EventKind, _Formatter] = {
    EventKind.PUSH: _push,
    EventKind.CREATE: _create,
    EventKind.PUBLIC: _public,
    EventKind.COMMIT_COMMENT: _commit_comment,
    EventKind.DELETE: _delete,
    EventKind.MEMBER: _member,
    EventKind.FORK: _fork,
    EventKind.GOLLUM: _gollum,
    EventKind.ISSUE_COMMENT: _issue_comment,
    EventKind.ISSUES: _issues,
    EventKind.PULL_REQUEST_REVIEW: _pull_request_review,
    EventKind.PULL_REQUEST: _pull_request,
    EventKind.PULL_REQUEST_REVIEW_COMMENT: _pull_request_review_comment,
    EventKind.PULL_REQUEST_REVIEW_THREAD: _pull_request_review_thread,
    EventKind.RELEASE: _release,
    EventKind.SPONSORSHIP: _sponsorship,
    EventKind.WATCH: _watch,
}


def describe_event(event: Event) -> tuple[str, str]:
    """Return the ``(action, detail)`` pair for ``event``."""
    kind = event_kind(event.type)
    if kind is None:
        log_debug(logger, "No activity message for event type %r", event.type)
        return UNKNOWN_ACTIVITY, event.type

    payload = decode_payload(PAYLOAD_TYPES[kind], event.payload)
    action, detail = _FORMATTERS[kind](payload, _text(event.repo_name))
    return action.strip(), detail.strip()


def format_activity(event: Event, *, tz: dt.tzinfo | None = None) -> DisplayRecord:
    """Format one feed event as a :class:`DisplayRecord`.

    Parameters
    ----------
    event
        Decoded feed event of any kind, known or not.
    tz
        Timezone used for the date; ``None`` selects the local timezone.

    Returns
    -------
    DisplayRecord
        Action, detail and ``MM/DD/YYYY`` date for the event.

    """
    action, detail = describe_event(event)
    return DisplayRecord(
        action=action,
        detail=detail,
        date=format_event_date(event.created_at, tz=tz),
    )


def format_activities(
    events: typ.Iterable[Event], *, tz: dt.tzinfo | None = None
) -> list[DisplayRecord]:
    """Format every event, preserving order."""
    return [format_activity(event, tz=tz) for event in events]
