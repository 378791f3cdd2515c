"""The pane showing one task's details and log."""

from __future__ import annotations

from typing import Dict, List, Optional

from reckon.task.models import Task, TaskLogEntry

EMPTY_VIEW = "No task selected\n\nPress Ctrl+T to select a task"


class TaskView:
    """Renders a task as text; log days are shown most recent first."""

    def __init__(self, task: Optional[Task] = None) -> None:
        self.task = task
        self.width = 0
        self.height = 0

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def view(self) -> str:
        """Return the rendered task."""
        task = self.task
        if task is None:
            return EMPTY_VIEW

        parts = [
            f"{task.title}\n",
            f"ID: {task.id} | Status: {task.status} | Created: {task.created}\n",
        ]
        if task.tags:
            parts.append(f"Tags: {', '.join(task.tags)}\n")
        parts.append("\n")

        parts.append("Description\n")
        parts.append(task.description or "(no description)")
        parts.append("\n\n")

        parts.append("Log\n")
        if not task.log_entries:
            parts.append("(no log entries)")
        else:
            by_date: Dict[str, List[TaskLogEntry]] = {}
            for entry in task.log_entries:
                by_date.setdefault(entry.date, []).append(entry)
            for date in reversed(list(by_date)):
                parts.append(f"\n{date}\n")
                for entry in by_date[date]:
                    parts.append(f"{entry.timestamp.strftime('%H:%M')} {entry.content}\n")

        return "".join(parts)