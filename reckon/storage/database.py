"""SQLite index holding journals and tasks."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from os import PathLike
from typing import Iterator, Sequence, Tuple, Union

# Each column: (name, SQL type, extra constraint text).
_Column = Tuple[str, str, str]
# Each foreign key: (column, referenced table, referenced column).
_ForeignKey = Tuple[str, str, str]


def _journal_ref() -> _ForeignKey:
    return ("journal_date", "journals", "date")


_TABLES: Sequence[Tuple[str, Sequence[_Column], Sequence[str], Sequence[_ForeignKey]]] = (
    (
        "journals",
        (
            ("date", "TEXT", "PRIMARY KEY"),
            ("file_path", "TEXT", "NOT NULL"),
            ("last_modified", "INTEGER", "NOT NULL"),
        ),
        (),
        (),
    ),
    (
        "intentions",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("journal_date", "TEXT", "NOT NULL"),
            ("text", "TEXT", "NOT NULL"),
            ("status", "TEXT", "NOT NULL"),
            ("carried_from", "TEXT", ""),
            ("position", "INTEGER", "NOT NULL"),
        ),
        (),
        (_journal_ref(),),
    ),
    (
        "log_entries",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("journal_date", "TEXT", "NOT NULL"),
            ("timestamp", "TEXT", "NOT NULL"),
            ("content", "TEXT", "NOT NULL"),
            ("task_id", "TEXT", ""),
            ("entry_type", "TEXT", "NOT NULL"),
            ("duration_minutes", "INTEGER", ""),
            ("position", "INTEGER", "NOT NULL"),
        ),
        (),
        (_journal_ref(),),
    ),
    (
        "wins",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("journal_date", "TEXT", "NOT NULL"),
            ("text", "TEXT", "NOT NULL"),
            ("position", "INTEGER", "NOT NULL"),
        ),
        (),
        (_journal_ref(),),
    ),
    (
        "tasks",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("text", "TEXT", "NOT NULL"),
            ("status", "TEXT", "NOT NULL"),
            ("position", "INTEGER", "NOT NULL"),
            ("created_at", "INTEGER", "NOT NULL"),
        ),
        (),
        (),
    ),
    (
        "task_notes",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("task_id", "TEXT", "NOT NULL"),
            ("text", "TEXT", "NOT NULL"),
            ("position", "INTEGER", "NOT NULL"),
        ),
        (),
        (("task_id", "tasks", "id"),),
    ),
    (
        "schedule_items",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("journal_date", "TEXT", "NOT NULL"),
            ("time", "TEXT", "NOT NULL"),
            ("content", "TEXT", "NOT NULL"),
            ("position", "INTEGER", "NOT NULL"),
        ),
        (),
        (_journal_ref(),),
    ),
    (
        "phase2_tasks",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("title", "TEXT", "NOT NULL"),
            ("status", "TEXT", "NOT NULL"),
            ("created", "TEXT", "NOT NULL"),
            ("file_path", "TEXT", "NOT NULL"),
        ),
        (),
        (),
    ),
    (
        "phase2_task_tags",
        (
            ("task_id", "TEXT", "NOT NULL"),
            ("tag", "TEXT", "NOT NULL"),
        ),
        ("task_id", "tag"),
        (("task_id", "phase2_tasks", "id"),),
    ),
    (
        "phase2_task_log_entries",
        (
            ("id", "TEXT", "PRIMARY KEY"),
            ("task_id", "TEXT", "NOT NULL"),
            ("date", "TEXT", "NOT NULL"),
            ("timestamp", "TEXT", "NOT NULL"),
            ("content", "TEXT", "NOT NULL"),
        ),
        (),
        (("task_id", "phase2_tasks", "id"),),
    ),
)

# Each index: (index name, table, column).
_INDICES: Sequence[Tuple[str, str, str]] = (
    ("idx_intentions_date", "intentions", "journal_date"),
    ("idx_intentions_status", "intentions", "status"),
    ("idx_log_entries_date", "log_entries", "journal_date"),
    ("idx_log_entries_type", "log_entries", "entry_type"),
    ("idx_log_entries_task", "log_entries", "task_id"),
    ("idx_wins_date", "wins", "journal_date"),
    ("idx_tasks_status", "tasks", "status"),
    ("idx_tasks_position", "tasks", "position"),
    ("idx_task_notes_task", "task_notes", "task_id"),
    ("idx_schedule_items_date", "schedule_items", "journal_date"),
    ("idx_schedule_items_time", "schedule_items", "time"),
    ("idx_phase2_tasks_status", "phase2_tasks", "status"),
    ("idx_phase2_task_tags_tag", "phase2_task_tags", "tag"),
    ("idx_phase2_task_log_date", "phase2_task_log_entries", "date"),
    ("idx_phase2_task_log_task", "phase2_task_log_entries", "task_id"),
)


def _create_table(
    name: str,
    columns: Sequence[_Column],
    primary_key: Sequence[str],
    foreign_keys: Sequence[_ForeignKey],
) -> str:
    parts = [" ".join(filter(None, column)) for column in columns]
    if primary_key:
        parts.append(f"PRIMARY KEY ({', '.join(primary_key)})")
    parts.extend(
        f"FOREIGN KEY ({col}) REFERENCES {table}({ref}) ON DELETE CASCADE"
        for col, table, ref in foreign_keys
    )
    return f"CREATE TABLE IF NOT EXISTS {name} ({', '.join(parts)})"


def _schema() -> str:
    statements = [_create_table(*table) for table in _TABLES]
    statements.extend(
        f"CREATE INDEX IF NOT EXISTS {name} ON {table}({column})"
        for name, table, column in _INDICES
    )
    return ";\n".join(statements) + ";\n"


SCHEMA = _schema()

_BUSY_TIMEOUT_SECONDS = 5.0


class Database:
    """A SQLite connection with the schema in place.

    Plain statements run in autocommit mode; use :meth:`transaction` to group
    several statements into one atomic unit.
    """

    def __init__(self, path: Union[str, "PathLike[str]"]) -> None:
        self.path = str(path)
        self._lock = threading.RLock()
        self.connection = sqlite3.connect(
            self.path,
            timeout=_BUSY_TIMEOUT_SECONDS,
            isolation_level=None,
            check_same_thread=False,
        )
        try:
            self.connection.execute("PRAGMA journal_mode=WAL")
            self.connection.executescript(SCHEMA)
        except sqlite3.Error:
            self.connection.close()
            raise

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the block in a transaction, committing on success and rolling back on error."""
        with self._lock:
            conn = self.connection
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def close(self) -> None:
        """Close the connection."""
        self.connection.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args) -> None:
        self.close()