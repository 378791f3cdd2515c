"""Storing tasks in the SQLite index."""

from __future__ import annotations

from typing import Iterable, List, Optional

from reckon.storage.database import Database
from reckon.task.models import Status, Task

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_TASK_COLUMNS = "id, title, status, created, file_path"


class TaskNotFoundError(LookupError):
    """No task with the requested id exists."""


class TaskRepository:
    """Reads and writes tasks in the database."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def save_task(self, task: Task) -> None:
        """Insert or replace ``task`` together with its tags and log entries."""
        with self.db.transaction() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO phase2_tasks ({_TASK_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (task.id, task.title, str(task.status), task.created, str(task.file_path)),
            )
            conn.execute("DELETE FROM phase2_task_tags WHERE task_id = ?", (task.id,))
            conn.executemany(
                "INSERT INTO phase2_task_tags (task_id, tag) VALUES (?, ?)",
                [(task.id, tag) for tag in task.tags],
            )
            conn.execute("DELETE FROM phase2_task_log_entries WHERE task_id = ?", (task.id,))
            conn.executemany(
                "INSERT INTO phase2_task_log_entries (id, task_id, date, timestamp, content)"
                " VALUES (?, ?, ?, ?, ?)",
                [
                    (e.id, task.id, e.date, e.timestamp.strftime(_TIMESTAMP_FORMAT), e.content)
                    for e in task.log_entries
                ],
            )

    def get_task_by_id(self, task_id: str) -> Task:
        """Return the task's metadata and tags."""
        row = self.db.connection.execute(
            f"SELECT {_TASK_COLUMNS} FROM phase2_tasks WHERE id = ?", (task_id,)
        ).fetchone()
        if row is None:
            raise TaskNotFoundError(f"task not found: {task_id}")
        return self._task_from_row(row)

    def list_tasks(self, status: Optional[Status], tags: Optional[Iterable[str]]) -> List[Task]:
        """Return tasks with ``status`` (if given) carrying every tag in ``tags``, newest first."""
        query = f"SELECT {_TASK_COLUMNS} FROM phase2_tasks WHERE 1=1"
        params: list = []

        if status is not None:
            query += " AND status = ?"
            params.append(str(status))

        wanted = list(tags or [])
        if wanted:
            placeholders = ",".join("?" * len(wanted))
            query += (
                " AND id IN (SELECT task_id FROM phase2_task_tags"
                f" WHERE tag IN ({placeholders})"
                " GROUP BY task_id HAVING COUNT(DISTINCT tag) = ?)"
            )
            params.extend(wanted)
            params.append(len(wanted))

        query += " ORDER BY created DESC"
        rows = self.db.connection.execute(query, params).fetchall()
        return [self._task_from_row(row) for row in rows]

    def delete_task(self, task_id: str) -> None:
        """Delete the task's record."""
        self.db.connection.execute("DELETE FROM phase2_tasks WHERE id = ?", (task_id,))

    def _task_from_row(self, row) -> Task:
        task_id, title, status, created, file_path = row
        tags = [
            tag
            for (tag,) in self.db.connection.execute(
                "SELECT tag FROM phase2_task_tags WHERE task_id = ?", (task_id,)
            )
        ]
        return Task(
            id=task_id,
            title=title,
            status=Status(status),
            created=created,
            tags=tags,
            file_path=file_path,
        )