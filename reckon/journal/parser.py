"""Reading daily journals from their markdown form."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Optional

from reckon.journal.models import (
    EntryType,
    Intention,
    IntentionStatus,
    Journal,
    LogEntry,
    Win,
)

_FRONTMATTER_DELIM_RE = re.compile(r"^---\s*$", re.ASCII)
_FRONTMATTER_DATE_RE = re.compile(r"^date:\s*(.+)$", re.ASCII)

_SECTION_HEADER_RE = re.compile(r"^##\s+(.+)$", re.ASCII)

_INTENTION_OPEN_RE = re.compile(r"^-\s+\[\s+\]\s+(.+)$", re.ASCII)
_INTENTION_DONE_RE = re.compile(r"^-\s+\[x\]\s+(.+)$", re.ASCII)
_INTENTION_CARRIED_RE = re.compile(r"^-\s+\[>\]\s+(.+)$", re.ASCII)

_LOG_ENTRY_RE = re.compile(r"^-\s+(\d{1,2}:\d{2}(?::\d{2})?)\s+(.+)$", re.ASCII)

_TASK_REF_RE = re.compile(r"\[task:([^\]]+)\]")
_MEETING_REF_RE = re.compile(r"\[meeting:([^\]]+)\]")
_BREAK_REF_RE = re.compile(r"\[break\]")

_WIN_RE = re.compile(r"^-\s+(.+)$", re.ASCII)

_HOURS_MINUTES_RE = re.compile(r"(\d+)h(\d+)m", re.ASCII)
_HOURS_RE = re.compile(r"(\d+)h", re.ASCII)
_MINUTES_RE = re.compile(r"(\d+)m", re.ASCII)

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)
_CLOCK_SECONDS_RE = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})", re.ASCII)

_CARRIED_MARKER = " (carried from "


class Section(str, Enum):
    """The journal section a line belongs to."""

    NONE = "none"
    INTENTIONS = "intentions"
    WINS = "wins"
    LOG = "log"


_SECTION_NAMES = {
    "intentions": Section.INTENTIONS,
    "wins": Section.WINS,
    "log": Section.LOG,
}


def parse_journal(
    content: str, file_path: str, last_modified: Optional[datetime]
) -> Journal:
    """Parse a markdown journal into a :class:`Journal`."""
    journal = Journal(file_path=str(file_path), last_modified=last_modified)
    section = Section.NONE
    in_frontmatter = False

    for line in content.splitlines():
        trimmed = line.strip()

        if _FRONTMATTER_DELIM_RE.match(trimmed):
            in_frontmatter = not in_frontmatter
            continue

        if in_frontmatter:
            match = _FRONTMATTER_DATE_RE.match(trimmed)
            if match:
                journal.date = match.group(1).strip()
            continue

        header = _SECTION_HEADER_RE.match(trimmed)
        if header:
            section = _SECTION_NAMES.get(header.group(1).strip().lower(), Section.NONE)
            continue

        if not trimmed:
            continue

        if section is Section.INTENTIONS:
            intention = parse_intention(trimmed, len(journal.intentions))
            if intention is not None:
                journal.intentions.append(intention)
        elif section is Section.WINS:
            match = _WIN_RE.match(trimmed)
            if match:
                journal.wins.append(Win.create(match.group(1).strip(), len(journal.wins)))
        elif section is Section.LOG:
            entry = parse_log_entry(trimmed, journal.date, len(journal.log_entries))
            if entry is not None:
                journal.log_entries.append(entry)

    return journal


def parse_intention(line: str, position: int) -> Optional[Intention]:
    """Parse an intention line, or return None if it is not one."""
    match = _INTENTION_OPEN_RE.match(line)
    if match:
        return Intention.create(match.group(1).strip(), position)

    match = _INTENTION_DONE_RE.match(line)
    if match:
        intention = Intention.create(match.group(1).strip(), position)
        intention.status = IntentionStatus.DONE
        return intention

    match = _INTENTION_CARRIED_RE.match(line)
    if match:
        full_text = match.group(1).strip()
        text, carried_from = full_text, ""
        idx = full_text.find(_CARRIED_MARKER)
        if idx != -1:
            text = full_text[:idx].strip()
            carried_from = full_text[idx + len(_CARRIED_MARKER):].strip().strip(")")
        return Intention.carried(text, carried_from, position)

    return None


def parse_log_entry(line: str, date: str, position: int) -> Optional[LogEntry]:
    """Parse a ``- HH:MM content`` line, or return None if it is not one."""
    match = _LOG_ENTRY_RE.match(line)
    if not match:
        return None

    time_str = match.group(1)
    content = match.group(2).strip()

    try:
        timestamp = parse_time(date, time_str)
    except ValueError:
        return None

    entry = LogEntry.create(timestamp, content, EntryType.LOG, position)

    task_match = _TASK_REF_RE.search(content)
    if task_match:
        entry.task_id = task_match.group(1)

    if _MEETING_REF_RE.search(content):
        entry.entry_type = EntryType.MEETING

    if _BREAK_REF_RE.search(content):
        entry.entry_type = EntryType.BREAK

    entry.duration_minutes = parse_duration(content)
    return entry


def parse_time(date: str, time_str: str) -> datetime:
    """Combine a YYYY-MM-DD date with an H:MM or H:MM:SS time.

    Raises ValueError if either part is malformed or out of range.
    """
    date_match = _DATE_RE.fullmatch(date)
    if time_str.count(":") == 1:
        clock_match = _CLOCK_RE.fullmatch(time_str)
    else:
        clock_match = _CLOCK_SECONDS_RE.fullmatch(time_str)

    if date_match is None or clock_match is None:
        raise ValueError(f"cannot parse time {date!r} {time_str!r}")

    year, month, day = (int(part) for part in date_match.groups())
    clock = [int(part) for part in clock_match.groups()]
    hour, minute = clock[0], clock[1]
    second = clock[2] if len(clock) == 3 else 0
    return datetime(year, month, day, hour, minute, second)


def parse_duration(content: str) -> int:
    """Return the duration in minutes written in ``content`` (``30m``, ``2h``, ``1h30m``), or 0."""
    match = _HOURS_MINUTES_RE.search(content)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = _HOURS_RE.search(content)
    if match:
        return int(match.group(1)) * 60

    match = _MINUTES_RE.search(content)
    if match:
        return int(match.group(1))

    return 0