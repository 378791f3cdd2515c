"""Multi-day tasks and their log history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional

from reckon.journal.models import new_id


class Status(str, Enum):
    """Where a task stands."""

    ACTIVE = "active"
    DONE = "done"
    WAITING = "waiting"
    SOMEDAY = "someday"

    def __str__(self) -> str:
        return self.value


@dataclass
class TaskLogEntry:
    """A timestamped note in a task's log; ``date`` is YYYY-MM-DD."""

    id: str
    date: str
    timestamp: datetime
    content: str

    @classmethod
    def create(cls, timestamp: datetime, content: str) -> "TaskLogEntry":
        return cls(
            id=new_id(),
            date=timestamp.strftime("%Y-%m-%d"),
            timestamp=timestamp,
            content=content,
        )


@dataclass
class Task:
    """A task spanning several days; ``created`` is YYYY-MM-DD."""

    id: str
    title: str
    status: Status = Status.ACTIVE
    created: str = ""
    tags: List[str] = field(default_factory=list)
    description: str = ""
    log_entries: List[TaskLogEntry] = field(default_factory=list)
    file_path: str = ""

    @classmethod
    def create(cls, title: str, tags: Optional[Iterable[str]]) -> "Task":
        return cls(
            id=new_id(),
            title=title,
            status=Status.ACTIVE,
            created=date.today().strftime("%Y-%m-%d"),
            tags=list(tags or []),
        )

    def append_log(self, entry: TaskLogEntry) -> None:
        """Add ``entry`` to the end of the log."""
        self.log_entries.append(entry)