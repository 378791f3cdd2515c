"""Watching the journal directory and reindexing files that change."""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Set

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from reckon.journal.service import JournalService

_log = logging.getLogger(__name__)

_DEBOUNCE_SECONDS = 0.1
_SUFFIX = ".md"


@dataclass(frozen=True)
class FileChangeEvent:
    """A journal file that changed, and the date it belongs to."""

    file_path: Path
    date: str


class _Handler(FileSystemEventHandler):
    def __init__(self, callback) -> None:
        super().__init__()
        self._callback = callback

    def on_created(self, event) -> None:
        if not event.is_directory:
            self._callback(event.src_path)

    def on_modified(self, event) -> None:
        if not event.is_directory:
            self._callback(event.src_path)

    def on_moved(self, event) -> None:
        if not event.is_directory:
            self._callback(event.dest_path)


class Watcher:
    """Reports journal files written in the journal directory, debounced."""

    def __init__(self, service: JournalService) -> None:
        self.service = service
        self._observer = Observer()
        self._changes: "queue.Queue[Optional[FileChangeEvent]]" = queue.Queue()
        self._pending: Set[str] = set()
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._started = False
        self._stopped = False

    def _journal_dir(self) -> Path:
        return Path(self.service.file_store.journal_path("_")).parent

    def start(self) -> None:
        """Begin watching the journal directory."""
        directory = self._journal_dir()
        self._observer.schedule(_Handler(self._on_path), str(directory), recursive=False)
        self._observer.start()
        self._started = True

    def stop(self) -> None:
        """Stop watching; waiting callers of :meth:`next_change` get None."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._observer.stop()
        if self._started:
            self._observer.join()
        self._changes.put(None)

    def next_change(self, timeout: Optional[float] = None) -> Optional[FileChangeEvent]:
        """Return the next change, or None on timeout or once stopped."""
        try:
            event = self._changes.get(timeout=timeout)
        except queue.Empty:
            return None
        if event is None:
            self._changes.put(None)
        return event

    def _on_path(self, path) -> None:
        name = os.path.basename(os.fsdecode(path))
        if not name.endswith(_SUFFIX) or len(name) <= len(_SUFFIX):
            return
        with self._lock:
            if self._stopped:
                return
            self._pending.add(name[: -len(_SUFFIX)])
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(_DEBOUNCE_SECONDS, self._process_pending)
            self._timer.daemon = True
            self._timer.start()

    def _process_pending(self) -> None:
        with self._lock:
            if self._stopped:
                return
            dates = sorted(self._pending)
            self._pending = set()
            self._timer = None

        directory = self._journal_dir()
        for date in dates:
            try:
                self.service.get_by_date(date)
            except Exception as exc:  # keep watching whatever one file does
                _log.warning("failed to reindex journal %s: %s", date, exc)
                continue
            self._changes.put(FileChangeEvent(file_path=directory / f"{date}{_SUFFIX}", date=date))