"""Storing journals in the SQLite index."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import List, Optional

from reckon.journal.models import EntryType, Intention, IntentionStatus, Journal, LogEntry, Win
from reckon.storage.database import Database

_JOURNAL_TABLES = ("intentions", "log_entries", "wins", "journals")

_INTENTION_COLUMNS = "id, text, status, carried_from, position"


def _format_timestamp(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def _parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return datetime.min


def _intention_from_row(row) -> Intention:
    entry_id, text, status, carried_from, position = row
    return Intention(
        id=entry_id,
        text=text,
        status=IntentionStatus(status),
        carried_from=carried_from or "",
        position=position,
    )


class JournalRepository:
    """Reads and writes journals in the database."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def save_journal(self, journal: Journal) -> None:
        """Replace everything stored for the journal's date with ``journal``."""
        last_modified = (
            int(journal.last_modified.timestamp()) if journal.last_modified is not None else 0
        )
        with self.db.transaction() as conn:
            self._delete_journal_data(conn, journal.date)
            conn.execute(
                "INSERT INTO journals (date, file_path, last_modified) VALUES (?, ?, ?)",
                (journal.date, str(journal.file_path), last_modified),
            )
            conn.executemany(
                "INSERT INTO intentions (id, journal_date, text, status, carried_from, position)"
                " VALUES (?, ?, ?, ?, ?, ?)",
                [
                    (i.id, journal.date, i.text, str(i.status), i.carried_from, i.position)
                    for i in journal.intentions
                ],
            )
            conn.executemany(
                "INSERT INTO log_entries (id, journal_date, timestamp, content, task_id,"
                " entry_type, duration_minutes, position) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    (
                        e.id,
                        journal.date,
                        _format_timestamp(e.timestamp),
                        e.content,
                        e.task_id,
                        str(e.entry_type),
                        e.duration_minutes,
                        e.position,
                    )
                    for e in journal.log_entries
                ],
            )
            conn.executemany(
                "INSERT INTO wins (id, journal_date, text, position) VALUES (?, ?, ?, ?)",
                [(w.id, journal.date, w.text, w.position) for w in journal.wins],
            )

    def get_journal_by_date(self, date: str) -> Optional[Journal]:
        """Return the stored journal for ``date``, or None if there is none."""
        conn = self.db.connection
        row = conn.execute(
            "SELECT file_path, last_modified FROM journals WHERE date = ?", (date,)
        ).fetchone()
        if row is None:
            return None

        file_path, last_modified = row
        journal = Journal(
            date=date,
            file_path=file_path,
            last_modified=datetime.fromtimestamp(last_modified),
        )

        journal.intentions = [
            _intention_from_row(r)
            for r in conn.execute(
                f"SELECT {_INTENTION_COLUMNS} FROM intentions"
                " WHERE journal_date = ? ORDER BY position",
                (date,),
            )
        ]

        journal.log_entries = [
            LogEntry(
                id=entry_id,
                timestamp=_parse_timestamp(timestamp),
                content=content,
                task_id=task_id or "",
                entry_type=EntryType(entry_type),
                duration_minutes=duration or 0,
                position=position,
            )
            for entry_id, timestamp, content, task_id, entry_type, duration, position in (
                conn.execute(
                    "SELECT id, timestamp, content, task_id, entry_type, duration_minutes,"
                    " position FROM log_entries WHERE journal_date = ? ORDER BY position",
                    (date,),
                )
            )
        ]

        journal.wins = [
            Win(id=win_id, text=text, position=position)
            for win_id, text, position in conn.execute(
                "SELECT id, text, position FROM wins WHERE journal_date = ? ORDER BY position",
                (date,),
            )
        ]
        return journal

    def delete_journal(self, date: str) -> None:
        """Delete the journal for ``date`` and everything attached to it."""
        with self.db.transaction() as conn:
            self._delete_journal_data(conn, date)

    def get_open_intentions(self, date: str) -> List[Intention]:
        """Return the open intentions of ``date`` in position order."""
        rows = self.db.connection.execute(
            f"SELECT {_INTENTION_COLUMNS} FROM intentions"
            " WHERE journal_date = ? AND status = ? ORDER BY position",
            (date, str(IntentionStatus.OPEN)),
        )
        return [_intention_from_row(r) for r in rows]

    def clear_all_data(self) -> None:
        """Delete every journal from the database."""
        with self.db.transaction() as conn:
            for table in _JOURNAL_TABLES:
                conn.execute(f"DELETE FROM {table}")

    @staticmethod
    def _delete_journal_data(conn: sqlite3.Connection, date: str) -> None:
        for table in _JOURNAL_TABLES:
            column = "date" if table == "journals" else "journal_date"
            conn.execute(f"DELETE FROM {table} WHERE {column} = ?", (date,))