"""Locations of the data directory and the files inside it."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "reckon"
DB_NAME = "reckon.db"

_DIR_MODE = 0o755


def _ensure(path: Path) -> Path:
    path.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
    return path


def data_dir() -> Path:
    """Return ``~/.reckon``, creating it if needed."""
    return _ensure(Path.home() / f".{APP_NAME}")


def journal_dir() -> Path:
    """Return ``~/.reckon/journal``, creating it if needed."""
    return _ensure(data_dir() / "journal")


def tasks_dir() -> Path:
    """Return ``~/.reckon/tasks``, creating it if needed."""
    return _ensure(data_dir() / "tasks")


def notes_dir() -> Path:
    """Return ``~/.reckon/notes``, creating it if needed."""
    return _ensure(data_dir() / "notes")


def database_path() -> Path:
    """Return the path of the SQLite index, ``~/.reckon/reckon.db``."""
    return data_dir() / DB_NAME