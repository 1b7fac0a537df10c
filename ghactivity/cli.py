"""Command-line entry point: show a GitHub user's recent public activity."""

from __future__ import annotations

import argparse
import asyncio
import sys
import typing as typ

from ghactivity.config import LOG_LEVEL_ENV_VAR, ActivityConfig
from ghactivity.events import (
    EventKind,
    decode_events,
    filter_events,
    format_activities,
    is_known_event_kind,
)
from ghactivity.github import GitHubActivityError, GitHubEventsClient
from ghactivity.logging import (
    configure_logging,
    get_logger,
    log_debug,
    log_info,
    log_warning,
)
from ghactivity.presenter import render_activities

if typ.TYPE_CHECKING:
    from ghactivity.github import GitHubEventsSource

logger = get_logger(__name__)

PROG = "gh-activity"

USAGE_EXAMPLES = f"""\
Example:
  {PROG} octocat
  {PROG} octocat PushEvent
"""


class UsageError(Exception):
    """Raised when the command line has the wrong number of arguments."""


class _ActivityArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting."""

    def error(self, message: str) -> typ.NoReturn:
        raise UsageError(message)


def _build_parser() -> _ActivityArgumentParser:
    parser = _ActivityArgumentParser(
        prog=PROG,
        description=__doc__,
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("username", help="GitHub username whose events to show")
    parser.add_argument(
        "event_filter",
        nargs="?",
        default=None,
        metavar="filter",
        help="Only show events of this type, e.g. PushEvent",
    )
    return parser


def valid_event_types_message() -> str:
    """Return the listing of event types that have activity messages."""
    return "Valid event types:\n" + ", ".join(kind.value for kind in EventKind)


def _report_failure(
    exc: Exception, event_filter: str | None, err: typ.TextIO
) -> None:
    err.write(f"Error: {exc}\n")
    if event_filter and not is_known_event_kind(event_filter):
        err.write(f"\n{valid_event_types_message()}\n")


async def run(
    username: str,
    event_filter: str | None,
    *,
    client: GitHubEventsSource,
    out: typ.TextIO,
    err: typ.TextIO,
) -> int:
    """Fetch, filter, format and print the activity feed for ``username``.

    Parameters
    ----------
    username : str
        GitHub login whose public events are shown.
    event_filter : str | None
        Event type to keep; ``None`` keeps every event.
    client : GitHubEventsSource
        Source of the raw event feed.
    out : TextIO
        Sink for activity blocks and the empty-result message.
    err : TextIO
        Sink for failure messages.

    Returns
    -------
    int
        Exit code: 0 on success (including no results), 1 when the fetch
        fails.

    """
    try:
        raw_events = await client.fetch_user_events(username)
    except (GitHubActivityError, ValueError) as exc:
        log_info(logger, "Fetching events for %s failed: %s", username, exc)
        _report_failure(exc, event_filter, err)
        return 1

    events = filter_events(decode_events(raw_events), event_filter)
    log_debug(
        logger,
        "%d of %d events match filter %r",
        len(events),
        len(raw_events),
        event_filter,
    )
    render_activities(
        format_activities(events),
        username=username,
        event_filter=event_filter,
        out=out,
    )
    return 0


async def _run_with_default_client(username: str, event_filter: str | None) -> int:
    async with GitHubEventsClient() as client:
        return await run(
            username,
            event_filter,
            client=client,
            out=sys.stdout,
            err=sys.stderr,
        )


def _configure_logging() -> None:
    config = ActivityConfig.from_env()
    configure_logging(config.log_level, force=True)
    if config.invalid_log_level is not None:
        log_warning(
            logger,
            "Invalid %s %r, falling back to %s",
            LOG_LEVEL_ENV_VAR,
            config.invalid_log_level,
            config.log_level,
        )


def main(argv: list[str] | None = None) -> int:
    """Show the recent public activity of a GitHub user.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on a usage error or a failed fetch.

    """
    _configure_logging()
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        log_debug(logger, "Rejected arguments: %s", exc)
        sys.stdout.write(f"{parser.format_usage()}\n{USAGE_EXAMPLES}")
        return 1

    return asyncio.run(_run_with_default_client(args.username, args.event_filter))


if __name__ == "__main__":
    raise SystemExit(main())
