"""Reading and writing task markdown files."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

import yaml

from reckon.task.models import Status, Task, TaskLogEntry


class TaskParseError(ValueError):
    """A task file is not in the expected form."""


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def _parse_frontmatter(text: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TaskParseError(f"failed to parse frontmatter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TaskParseError("failed to parse frontmatter: not a mapping")
    return data


def _parse_log_line(line: str, date: str) -> Optional[TaskLogEntry]:
    parts = line[len("- "):].split(" ", 1)
    if len(parts) < 2:
        return None
    time_str, content = parts
    try:
        timestamp = dt.datetime.strptime(f"{date} {time_str}", "%Y-%m-%d %H:%M")
    except ValueError:
        return None
    return TaskLogEntry.create(timestamp, content)


def parse_task(content: str, file_path: str) -> Task:
    """Parse a task file into a :class:`Task`."""
    lines = content.split("\n")
    if len(lines) < 3:
        raise TaskParseError("invalid task file: too few lines")
    if lines[0] != "---":
        raise TaskParseError("invalid task file: missing frontmatter")
    try:
        fm_end = lines.index("---", 1)
    except ValueError:
        raise TaskParseError("invalid task file: frontmatter not closed") from None

    fm = _parse_frontmatter("\n".join(lines[1:fm_end]))
    status_value = _as_str(fm.get("status"))
    try:
        status = Status(status_value)
    except ValueError:
        raise TaskParseError(f"invalid task status: {status_value!r}") from None

    tags = fm.get("tags") or []
    if not isinstance(tags, list):
        tags = [tags]

    task = Task(
        id=_as_str(fm.get("id")),
        title=_as_str(fm.get("title")),
        status=status,
        created=_as_str(fm.get("created")),
        tags=[_as_str(tag) for tag in tags],
        file_path=str(file_path),
    )

    section = ""
    current_date = ""
    description: List[str] = []
    for line in lines[fm_end + 1:]:
        if line.startswith("## "):
            section = line[len("## "):]
            continue
        if line.startswith("### ") and section == "Log":
            current_date = line[len("### "):]
            continue
        if section == "Description":
            if line:
                description.append(line)
        elif section == "Log" and current_date and line.startswith("- "):
            entry = _parse_log_line(line, current_date)
            if entry is not None:
                task.log_entries.append(entry)

    task.description = "\n".join(description)
    return task


def write_task(task: Task) -> str:
    """Return the markdown text of ``task``."""
    parts = [
        "---\n",
        f"id: {task.id}\n",
        f"title: {task.title}\n",
        f"created: {task.created}\n",
        f"status: {task.status}\n",
    ]
    if task.tags:
        parts.append(f"tags: [{', '.join(task.tags)}]\n")
    parts.append("---\n\n")

    parts.append("## Description\n")
    if task.description:
        parts.append(f"{task.description}\n")
    parts.append("\n")

    parts.append("## Log\n\n")
    by_date: Dict[str, List[TaskLogEntry]] = {}
    for entry in task.log_entries:
        by_date.setdefault(entry.date, []).append(entry)
    for date, entries in by_date.items():
        parts.append(f"### {date}\n")
        for entry in entries:
            parts.append(f"- {entry.timestamp.strftime('%H:%M')} {entry.content}\n")
        parts.append("\n")

    return "".join(parts)