"""Markdown files on disk: daily journals and the tasks file."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from reckon import config

_JOURNAL_SUFFIX = ".md"


@dataclass
class FileInfo:
    """Where a file lives, when it last changed, and whether it exists."""

    path: Path
    last_modified: Optional[datetime] = None
    exists: bool = False


def _read(path: Path) -> Tuple[str, FileInfo]:
    try:
        stat = path.stat()
    except FileNotFoundError:
        return "", FileInfo(path=path, exists=False)
    content = path.read_text(encoding="utf-8")
    return content, FileInfo(
        path=path,
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        exists=True,
    )


@dataclass
class FileStore:
    """Reads and writes journal and task files.

    With ``root`` unset, files live in the user's data directory.
    """

    root: Optional[Path] = None

    def _data_dir(self) -> Path:
        if self.root is None:
            return config.data_dir()
        root = Path(self.root)
        root.mkdir(parents=True, exist_ok=True)
        return root

    def _journal_dir(self) -> Path:
        if self.root is None:
            return config.journal_dir()
        path = self._data_dir() / "journal"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def journal_path(self, date: str) -> Path:
        """Return the path of the journal file for ``date``."""
        return self._journal_dir() / f"{date}{_JOURNAL_SUFFIX}"

    def read_journal_file(self, date: str) -> Tuple[str, FileInfo]:
        """Return the journal's content and file metadata; empty content if it is missing."""
        return _read(self.journal_path(date))

    def write_journal_file(self, date: str, content: str) -> None:
        """Write ``content`` to the journal file for ``date``."""
        self.journal_path(date).write_text(content, encoding="utf-8")

    def list_journal_dates(self) -> List[str]:
        """Return the dates of all journal files, sorted."""
        directory = self._journal_dir()
        if not directory.is_dir():
            return []
        return sorted(
            entry.name[: -len(_JOURNAL_SUFFIX)]
            for entry in directory.iterdir()
            if entry.name.endswith(_JOURNAL_SUFFIX) and not entry.is_dir()
        )

    def journal_exists(self, date: str) -> bool:
        """Return whether a journal file exists for ``date``."""
        return self.journal_path(date).exists()

    def delete_journal(self, date: str) -> None:
        """Delete the journal file for ``date``; a missing file is not an error."""
        self.journal_path(date).unlink(missing_ok=True)

    def tasks_path(self) -> Path:
        """Return the path of the tasks file."""
        return self._data_dir() / "tasks.md"

    def read_tasks_file(self) -> Tuple[str, FileInfo]:
        """Return the tasks file's content and metadata; empty content if it is missing."""
        return _read(self.tasks_path())

    def write_tasks_file(self, content: str) -> None:
        """Write ``content`` to the tasks file."""
        self.tasks_path().write_text(content, encoding="utf-8")