"""A searchable list for choosing a task."""

from __future__ import annotations

from typing import List, Optional, Sequence

from reckon.task.models import Task
from reckon.tui.text_input import TextInput

MAX_DISPLAY = 10
FOOTER = "↑/↓: navigate • enter: select • esc: cancel"


class TaskPicker:
    """Filters tasks by title or tag as the user types."""

    def __init__(self, tasks: Sequence[Task]) -> None:
        self.tasks: List[Task] = list(tasks)
        self.filtered_tasks: List[Task] = list(self.tasks)
        self.search_input = TextInput(placeholder="Search tasks...", char_limit=100)
        self.search_input.focus()
        self.selected_index = 0
        self.width = 0
        self.height = 0

    def handle_key(self, key: str) -> None:
        """Move the selection or edit the search text."""
        if key in ("up", "k"):
            if self.selected_index > 0:
                self.selected_index -= 1
            return
        if key in ("down", "j"):
            if self.selected_index < len(self.filtered_tasks) - 1:
                self.selected_index += 1
            return

        self.search_input.handle_key(key)
        self._filter()
        if self.selected_index >= len(self.filtered_tasks):
            self.selected_index = 0

    def _filter(self) -> None:
        query = self.search_input.value.lower()
        if not query:
            self.filtered_tasks = list(self.tasks)
            return
        self.filtered_tasks = [
            t
            for t in self.tasks
            if query in t.title.lower() or any(query in tag.lower() for tag in t.tags)
        ]

    def selected_task(self) -> Optional[Task]:
        """Return the highlighted task, or None if nothing matches."""
        if 0 <= self.selected_index < len(self.filtered_tasks):
            return self.filtered_tasks[self.selected_index]
        return None

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.search_input.width = width - 4

    def view(self) -> str:
        """Return the picker as text."""
        parts = ["Select Task\n\n", self.search_input.view(), "\n\n"]

        if not self.filtered_tasks:
            parts.append("No tasks found")
        else:
            shown = self.filtered_tasks[:MAX_DISPLAY]
            for index, task in enumerate(shown):
                marker = "▶ " if index == self.selected_index else "  "
                line = f"{marker}{task.title}"
                if task.tags:
                    line += f" [{', '.join(task.tags)}]"
                parts.append(line + "\n")
            hidden = len(self.filtered_tasks) - len(shown)
            if hidden > 0:
                parts.append(f"\n... and {hidden} more")

        parts.append("\n\n")
        parts.append(FOOTER)
        return "".join(parts)