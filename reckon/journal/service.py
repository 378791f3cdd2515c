"""Journal workflows that keep the markdown files and the index in step."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from reckon.journal.models import EntryType, Intention, IntentionStatus, Journal, LogEntry, Win
from reckon.journal.parser import parse_journal
from reckon.journal.repository import JournalRepository
from reckon.journal.writer import write_journal
from reckon.storage.filesystem import FileStore

_DATE_FORMAT = "%Y-%m-%d"


class JournalNotFoundError(LookupError):
    """No journal file exists for the requested date."""


class IntentionNotFoundError(LookupError):
    """No intention with the requested id exists in the journal."""


def _today() -> str:
    return dt.date.today().strftime(_DATE_FORMAT)


def _entry_type_for(content: str) -> EntryType:
    if content.startswith("[meeting:"):
        return EntryType.MEETING
    if content.startswith("[break]"):
        return EntryType.BREAK
    return EntryType.LOG


class JournalService:
    """Reads, edits and saves daily journals."""

    def __init__(self, repo: JournalRepository, file_store: FileStore) -> None:
        self.repo = repo
        self.file_store = file_store

    def get_today(self) -> Journal:
        """Return today's journal, creating it if needed."""
        return self.get_by_date(_today())

    def get_by_date(self, date: str) -> Journal:
        """Return the journal for ``date``, creating and saving it if it has no file yet."""
        content, info = self.file_store.read_journal_file(date)

        if info.exists:
            return parse_journal(content, str(info.path), info.last_modified)

        journal = Journal(date=date)
        if date == _today():
            self._auto_carry_intentions(journal)
        self._save(journal)
        return journal

    def append_log(self, journal: Journal, content: str) -> None:
        """Append a log entry stamped with the current time and save."""
        entry = LogEntry.create(
            dt.datetime.now(), content, _entry_type_for(content), len(journal.log_entries)
        )
        journal.log_entries.append(entry)
        self._save(journal)

    def add_intention(self, journal: Journal, text: str) -> None:
        """Add an open intention and save."""
        journal.intentions.append(Intention.create(text, len(journal.intentions)))
        self._save(journal)

    def toggle_intention(self, journal: Journal, intention_id: str) -> None:
        """Flip an intention between open and done and save."""
        intention: Optional[Intention] = next(
            (i for i in journal.intentions if i.id == intention_id), None
        )
        if intention is None:
            raise IntentionNotFoundError(f"intention not found: {intention_id}")
        if intention.status is IntentionStatus.DONE:
            intention.status = IntentionStatus.OPEN
        else:
            intention.status = IntentionStatus.DONE
        self._save(journal)

    def add_win(self, journal: Journal, text: str) -> None:
        """Add a win and save."""
        journal.wins.append(Win.create(text, len(journal.wins)))
        self._save(journal)

    def rebuild(self) -> None:
        """Clear the index and fill it again from every journal file."""
        self.repo.clear_all_data()
        for date in self.file_store.list_journal_dates():
            content, info = self.file_store.read_journal_file(date)
            if info.exists:
                journal = parse_journal(content, str(info.path), info.last_modified)
                self.repo.save_journal(journal)

    def get_journal_content(self, date: str) -> str:
        """Return the markdown text of the journal for ``date``."""
        content, info = self.file_store.read_journal_file(date)
        if not info.exists:
            raise JournalNotFoundError(f"journal not found for date: {date}")
        return content

    def get_week_content(self) -> str:
        """Return the markdown of the last seven days' journals, oldest first."""
        today = dt.date.today()
        parts = []
        for days_back in range(6, -1, -1):
            date = (today - dt.timedelta(days=days_back)).strftime(_DATE_FORMAT)
            try:
                text = self.file_store.journal_path(date).read_text(encoding="utf-8")
            except OSError:
                continue
            parts.append(f"# {date}\n\n{text}\n\n---\n\n")
        return "".join(parts)

    def _save(self, journal: Journal) -> None:
        self.file_store.write_journal_file(journal.date, write_journal(journal))
        journal.file_path = str(self.file_store.journal_path(journal.date))
        journal.last_modified = dt.datetime.now()
        self.repo.save_journal(journal)

    def _auto_carry_intentions(self, journal: Journal) -> None:
        today = dt.datetime.strptime(journal.date, _DATE_FORMAT).date()
        yesterday = (today - dt.timedelta(days=1)).strftime(_DATE_FORMAT)
        for intention in self.repo.get_open_intentions(yesterday):
            journal.intentions.append(
                Intention.carried(intention.text, yesterday, len(journal.intentions))
            )