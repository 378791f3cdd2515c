from datetime import datetime

from reckon.journal.models import (
    EntryType,
    Intention,
    IntentionStatus,
    Journal,
    LogEntry,
    ScheduleItem,
    Task,
    TaskNote,
    TaskStatus,
    Win,
    new_id,
)


def test_new_intention():
    intention = Intention.create("Test intention", 1)
    assert intention.text == "Test intention"
    assert intention.status == IntentionStatus.OPEN
    assert intention.position == 1
    assert intention.id != ""
    assert intention.carried_from == ""


def test_new_carried_intention():
    intention = Intention.carried("Carried intention", "2023-12-01", 2)
    assert intention.text == "Carried intention"
    assert intention.status == IntentionStatus.CARRIED
    assert intention.carried_from == "2023-12-01"
    assert intention.position == 2


def test_new_log_entry():
    timestamp = datetime.now()
    entry = LogEntry.create(timestamp, "Test log entry", EntryType.LOG, 3)
    assert entry.timestamp == timestamp
    assert entry.content == "Test log entry"
    assert entry.entry_type == EntryType.LOG
    assert entry.position == 3
    assert entry.id != ""
    assert entry.task_id == ""
    assert entry.duration_minutes == 0


def test_new_win():
    win = Win.create("Test win", 4)
    assert win.text == "Test win"
    assert win.position == 4
    assert win.id != ""


def test_new_journal():
    journal = Journal("2023-12-01")
    assert journal.date == "2023-12-01"
    assert journal.intentions == []
    assert journal.wins == []
    assert journal.log_entries == []
    assert journal.schedule_items == []


def test_journals_do_not_share_lists():
    first = Journal("2023-12-01")
    second = Journal("2023-12-02")
    first.wins.append(Win.create("x", 0))
    assert second.wins == []


def test_new_task_and_note():
    task = Task.create("Write report", 0)
    note = TaskNote.create("first draft", 1)
    assert task.status == TaskStatus.OPEN
    assert task.notes == []
    assert task.text == "Write report"
    assert note.text == "first draft"
    assert note.position == 1


def test_new_schedule_item():
    when = datetime(2023, 12, 1, 9, 0)
    item = ScheduleItem.create(when, "Standup", 0)
    assert item.time == when
    assert item.content == "Standup"


def test_new_id_shape_and_uniqueness():
    ids = [new_id() for _ in range(500)]
    assert len(set(ids)) == len(ids)
    assert all(len(i) == 20 for i in ids)
    assert all(c in "0123456789abcdefghijklmnopqrstuv" for i in ids for c in i)


def test_status_string_values():
    assert str(IntentionStatus.DONE) == "done"
    assert EntryType("meeting") is EntryType.MEETING
    assert f"{EntryType.BREAK}" == "break"