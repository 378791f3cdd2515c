from datetime import datetime

import pytest

from reckon.task.models import Status, Task, TaskLogEntry
from reckon.task.parser import TaskParseError, parse_task, write_task


def _sample_task():
    return Task(
        id="abc",
        title="T",
        status=Status.ACTIVE,
        created="2024-01-02",
        tags=["x", "y"],
        description="Desc",
        log_entries=[
            TaskLogEntry(
                id="e1",
                date="2024-01-02",
                timestamp=datetime(2024, 1, 2, 9, 5),
                content="hello",
            )
        ],
    )


def test_write_task_exact_format():
    expected = (
        "---\nid: abc\ntitle: T\ncreated: 2024-01-02\nstatus: active\n"
        "tags: [x, y]\n---\n\n## Description\nDesc\n\n## Log\n\n"
        "### 2024-01-02\n- 09:05 hello\n\n"
    )
    assert write_task(_sample_task()) == expected


def test_write_task_without_tags_omits_line():
    task = _sample_task()
    task.tags = []
    task.description = ""
    text = write_task(task)
    assert "tags:" not in text
    assert "## Description\n\n## Log" in text


def test_round_trip():
    task = Task(
        id="t1",
        title="Plan release",
        status=Status.WAITING,
        created="2024-02-01",
        tags=["work", "release"],
        description="First line\nSecond line",
        log_entries=[
            TaskLogEntry.create(datetime(2024, 2, 1, 8, 15), "kickoff"),
            TaskLogEntry.create(datetime(2024, 2, 1, 17, 45), "wrap up"),
            TaskLogEntry.create(datetime(2024, 2, 3, 10, 0), "follow up"),
        ],
    )
    parsed = parse_task(write_task(task), "/tmp/t1.md")
    assert parsed.id == task.id
    assert parsed.title == task.title
    assert parsed.status is Status.WAITING
    assert parsed.created == task.created
    assert parsed.tags == task.tags
    assert parsed.description == task.description
    assert parsed.file_path == "/tmp/t1.md"
    assert [(e.date, e.timestamp, e.content) for e in parsed.log_entries] == [
        (e.date, e.timestamp, e.content) for e in task.log_entries
    ]


def test_parse_skips_malformed_log_lines():
    content = (
        "---\nid: a\ntitle: A\ncreated: 2024-01-01\nstatus: done\n---\n\n"
        "## Log\n\n- 09:00 before any date\n### 2024-01-01\n"
        "- nospace\n- 99:99 bad time\n- 10:00 good\n"
    )
    parsed = parse_task(content, "a.md")
    assert parsed.status is Status.DONE
    assert parsed.tags == []
    assert [e.content for e in parsed.log_entries] == ["good"]
    assert parsed.log_entries[0].date == "2024-01-01"


@pytest.mark.parametrize(
    "content",
    [
        "---\nid: a",
        "id: a\ntitle: A\n---\n",
        "---\nid: a\ntitle: A\n",
        "---\nid: [unclosed\n---\n",
        "---\nid: a\nstatus: unknown\n---\n",
    ],
)
def test_parse_errors(content):
    with pytest.raises(TaskParseError):
        parse_task(content, "bad.md")