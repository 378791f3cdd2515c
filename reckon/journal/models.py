"""Data held in a daily journal."""

from __future__ import annotations

import base64
import hashlib
import itertools
import os
import random
import socket
import threading
import time as _time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class IntentionStatus(_StrEnum):
    OPEN = "open"
    DONE = "done"
    CARRIED = "carried"


class TaskStatus(_StrEnum):
    OPEN = "open"
    DONE = "done"
    ARCHIVED = "archived"


class EntryType(_StrEnum):
    LOG = "log"
    MEETING = "meeting"
    BREAK = "break"


_MACHINE_ID = hashlib.md5(socket.gethostname().encode()).digest()[:3]
_counter = itertools.count(random.getrandbits(24))
_counter_lock = threading.Lock()


def new_id() -> str:
    """Return a new 20-character, time-ordered unique identifier."""
    with _counter_lock:
        count = next(_counter) & 0xFFFFFF
    raw = (
        int(_time.time()).to_bytes(4, "big")
        + _MACHINE_ID
        + (os.getpid() & 0xFFFF).to_bytes(2, "big")
        + count.to_bytes(3, "big")
    )
    return base64.b32hexencode(raw).decode("ascii").rstrip("=").lower()


@dataclass
class Intention:
    """Something meant to be done today."""

    id: str
    text: str
    status: IntentionStatus = IntentionStatus.OPEN
    carried_from: str = ""
    position: int = 0

    @classmethod
    def create(cls, text: str, position: int) -> "Intention":
        return cls(id=new_id(), text=text, status=IntentionStatus.OPEN, position=position)

    @classmethod
    def carried(cls, text: str, carried_from: str, position: int) -> "Intention":
        return cls(
            id=new_id(),
            text=text,
            status=IntentionStatus.CARRIED,
            carried_from=carried_from,
            position=position,
        )


@dataclass
class LogEntry:
    """A timestamped line in the journal's log."""

    id: str
    timestamp: datetime
    content: str
    entry_type: EntryType = EntryType.LOG
    task_id: str = ""
    duration_minutes: int = 0
    position: int = 0

    @classmethod
    def create(
        cls, timestamp: datetime, content: str, entry_type: EntryType, position: int
    ) -> "LogEntry":
        return cls(
            id=new_id(),
            timestamp=timestamp,
            content=content,
            entry_type=entry_type,
            position=position,
        )


@dataclass
class Win:
    """Something accomplished today."""

    id: str
    text: str
    position: int = 0

    @classmethod
    def create(cls, text: str, position: int) -> "Win":
        return cls(id=new_id(), text=text, position=position)


@dataclass
class TaskNote:
    """A note attached to a task."""

    id: str
    text: str
    position: int = 0

    @classmethod
    def create(cls, text: str, position: int) -> "TaskNote":
        return cls(id=new_id(), text=text, position=position)


@dataclass
class Task:
    """A global task with notes."""

    id: str
    text: str
    status: TaskStatus = TaskStatus.OPEN
    notes: List[TaskNote] = field(default_factory=list)
    position: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(cls, text: str, position: int) -> "Task":
        return cls(
            id=new_id(),
            text=text,
            status=TaskStatus.OPEN,
            position=position,
            created_at=datetime.now(),
        )


@dataclass
class ScheduleItem:
    """A scheduled item in a journal."""

    id: str
    time: datetime
    content: str
    position: int = 0

    @classmethod
    def create(cls, time: datetime, content: str, position: int) -> "ScheduleItem":
        return cls(id=new_id(), time=time, content=content, position=position)


@dataclass
class Journal:
    """One day's journal; ``date`` is in YYYY-MM-DD form."""

    date: str = ""
    intentions: List[Intention] = field(default_factory=list)
    wins: List[Win] = field(default_factory=list)
    log_entries: List[LogEntry] = field(default_factory=list)
    schedule_items: List[ScheduleItem] = field(default_factory=list)
    file_path: str = ""
    last_modified: Optional[datetime] = None