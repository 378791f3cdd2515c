from datetime import datetime

import pytest

from reckon.journal.models import (
    EntryType,
    Intention,
    IntentionStatus,
    Journal,
    LogEntry,
    Win,
)
from reckon.journal.parser import parse_journal
from reckon.journal.writer import format_duration, write_journal


@pytest.mark.parametrize("minutes, expected", [(30, "30m"), (120, "2h"), (90, "1h30m")])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_empty_journal_layout():
    text = write_journal(Journal(date="2023-12-01"))
    assert text == "---\ndate: 2023-12-01\n---\n\n## Intentions\n\n\n## Wins\n\n\n## Log\n\n"


def _sample_journal():
    journal = Journal(date="2023-12-01")
    journal.intentions = [
        Intention.create("Second", 1),
        Intention.create("First", 0),
        Intention.carried("Carried", "2023-11-30", 2),
    ]
    journal.intentions[0].status = IntentionStatus.DONE
    journal.wins = [Win.create("Fixed a bug", 1), Win.create("Completed a task", 0)]
    journal.log_entries = [
        LogEntry.create(datetime(2023, 12, 1, 9, 0), "Started work", EntryType.LOG, 0),
        LogEntry.create(
            datetime(2023, 12, 1, 10, 30), "[meeting:standup] Notes", EntryType.MEETING, 1
        ),
    ]
    journal.log_entries[1].duration_minutes = 30
    return journal


def test_write_orders_by_position_and_marks_status():
    text = write_journal(_sample_journal())
    assert "- [>] Carried (carried from 2023-11-30)" in text
    assert text.index("First") < text.index("Second")
    assert text.index("Completed a task") < text.index("Fixed a bug")
    assert "- [x] Second" in text
    assert "- [ ] First" in text


def test_round_trip_through_parser():
    original = _sample_journal()
    parsed = parse_journal(write_journal(original), "x.md", None)
    assert parsed.date == original.date
    ordered = sorted(original.intentions, key=lambda i: i.position)
    assert [(i.text, i.status, i.carried_from) for i in parsed.intentions] == [
        (i.text, i.status, i.carried_from) for i in ordered
    ]
    assert [w.text for w in parsed.wins] == ["Completed a task", "Fixed a bug"]
    assert [e.timestamp for e in parsed.log_entries] == [
        e.timestamp for e in original.log_entries
    ]
    assert parsed.log_entries[1].entry_type == EntryType.MEETING
    assert parsed.log_entries[1].duration_minutes == 30


def test_duration_not_repeated_when_already_present():
    journal = Journal(date="2023-12-01")
    entry = LogEntry.create(datetime(2023, 12, 1, 12, 0), "[break] 45m Lunch", EntryType.BREAK, 0)
    entry.duration_minutes = 45
    journal.log_entries = [entry]
    text = write_journal(journal)
    assert text.count("45m") == 1


def test_write_is_stable_after_reparse():
    first = write_journal(_sample_journal())
    second = write_journal(parse_journal(first, "x.md", None))
    assert first == second