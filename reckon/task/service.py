"""Task workflows that keep task files, the index and the journal in step."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Iterable, List, Optional

from reckon import config
from reckon.journal.service import JournalService
from reckon.task.models import Status, Task, TaskLogEntry
from reckon.task.parser import parse_task, write_task
from reckon.task.repository import TaskRepository


class TaskService:
    """Creates, reads and updates multi-day tasks."""

    def __init__(self, repo: TaskRepository, journal_service: JournalService) -> None:
        self.repo = repo
        self.journal_service = journal_service

    def create(self, title: str, tags: Optional[Iterable[str]] = None) -> Task:
        """Create a task, write its file and index it."""
        task = Task.create(title, tags)
        task.file_path = str(self._tasks_dir() / f"{task.id}.md")
        self._save(task)
        return task

    def get_by_id(self, task_id: str) -> Task:
        """Return the full task, read from its markdown file."""
        indexed = self.repo.get_task_by_id(task_id)
        content = Path(indexed.file_path).read_text(encoding="utf-8")
        return parse_task(content, indexed.file_path)

    def list(
        self, status: Optional[Status] = None, tags: Optional[Iterable[str]] = None
    ) -> List[Task]:
        """Return indexed tasks filtered by status and tags, newest first."""
        return self.repo.list_tasks(status, tags)

    def update_status(self, task_id: str, status: Status) -> None:
        """Set a task's status and save it."""
        task = self.get_by_id(task_id)
        task.status = Status(status)
        self._save(task)

    def append_log(self, task_id: str, content: str) -> None:
        """Log to the task and, tagged with the task id, to today's journal."""
        task = self.get_by_id(task_id)
        task.append_log(TaskLogEntry.create(dt.datetime.now(), content))
        self._save(task)

        today = self.journal_service.get_today()
        self.journal_service.append_log(today, f"[task:{task_id}] {content}")

    def delete(self, task_id: str) -> None:
        """Delete the task's file and its index record."""
        task = self.repo.get_task_by_id(task_id)
        Path(task.file_path).unlink(missing_ok=True)
        self.repo.delete_task(task_id)

    def _tasks_dir(self) -> Path:
        root = self.journal_service.file_store.root
        if root is None:
            return config.tasks_dir()
        path = Path(root) / "tasks"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _save(self, task: Task) -> None:
        Path(task.file_path).write_text(write_task(task), encoding="utf-8")
        self.repo.save_task(task)