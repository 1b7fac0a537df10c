"""Plain-text renderer for activity records.

Each record becomes a numbered block framed by separator lines:

    ------------------------------------------------------------
    [1]
    Action: Starred Repository
    Detail: octocat/Spoon-Knife
    Date:   03/15/2025
    ------------------------------------------------------------

Blocks are followed by a blank line. An empty feed renders a single
"no activities" line instead.
"""

from __future__ import annotations

import sys
import typing as typ

if typ.TYPE_CHECKING:
    from ghactivity.events.models import DisplayRecord

SEPARATOR = "-" * 60


def no_activities_message(username: str, event_filter: str | None = None) -> str:
    """Return the line shown when no records remain after filtering."""
    if event_filter:
        return (
            f"No matching activities found for {username} (filter: {event_filter})"
        )
    return f"No recent activities found for {username}"


def render_activity_block(index: int, record: DisplayRecord) -> str:
    """Render the block for the record at zero-based ``index``."""
    lines = [
        SEPARATOR,
        f"[{index + 1}]",
        f"Action: {record.action}",
        f"Detail: {record.detail}",
        f"Date:   {record.date}",
        SEPARATOR,
        "",
    ]
    return "\n".join(lines) + "\n"


def render_activities(
    records: typ.Sequence[DisplayRecord],
    *,
    username: str,
    event_filter: str | None = None,
    out: typ.TextIO | None = None,
) -> None:
    """Write every record block, or the empty-result message, to ``out``.

    Parameters
    ----------
    records
        Display records in presentation order.
    username
        GitHub login, used in the empty-result message.
    event_filter
        Filter the records were selected with, if any.
    out
        Text sink; defaults to ``sys.stdout``.

    """
    sink = out if out is not None else sys.stdout
    if not records:
        sink.write(f"{no_activities_message(username, event_filter)}\n")
        return

    for index, record in enumerate(records):
        sink.write(render_activity_block(index, record))
