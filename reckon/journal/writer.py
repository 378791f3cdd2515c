"""Serialising daily journals to markdown."""

from __future__ import annotations

from operator import attrgetter

from reckon.journal.models import IntentionStatus, Journal

_MARKERS = {
    IntentionStatus.DONE: "[x]",
    IntentionStatus.CARRIED: "[>]",
}

_BY_POSITION = attrgetter("position")


def format_duration(minutes: int) -> str:
    """Return minutes as ``30m``, ``2h`` or ``1h30m``."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h{mins}m"


def write_journal(journal: Journal) -> str:
    """Return the markdown text of ``journal``."""
    parts = ["---\n", f"date: {journal.date}\n", "---\n\n"]

    parts.append("## Intentions\n\n")
    for intention in sorted(journal.intentions, key=_BY_POSITION):
        marker = _MARKERS.get(intention.status, "[ ]")
        text = intention.text
        if intention.carried_from:
            text = f"{text} (carried from {intention.carried_from})"
        parts.append(f"- {marker} {text}\n")
    parts.append("\n")

    parts.append("## Wins\n\n")
    for win in sorted(journal.wins, key=_BY_POSITION):
        parts.append(f"- {win.text}\n")
    parts.append("\n")

    parts.append("## Log\n\n")
    for entry in sorted(journal.log_entries, key=_BY_POSITION):
        content = entry.content
        if entry.duration_minutes > 0:
            duration = format_duration(entry.duration_minutes)
            if duration not in content:
                content = f"{content} {duration}"
        parts.append(f"- {entry.timestamp.strftime('%H:%M')} {content}\n")

    return "".join(parts)