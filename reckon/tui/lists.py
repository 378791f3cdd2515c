"""Scrollable list panes for intentions, wins and log entries."""

from __future__ import annotations

from typing import Generic, List, Optional, Sequence, TypeVar

from reckon.journal.models import EntryType, Intention, IntentionStatus, LogEntry, Win

T = TypeVar("T")

SELECTED_PREFIX = "▶ "

_STATUS_SYMBOLS = {
    IntentionStatus.DONE: "✓",
    IntentionStatus.CARRIED: "→",
}
_OPEN_SYMBOL = "○"

_ENTRY_ICONS = {
    EntryType.MEETING: "📅",
    EntryType.BREAK: "☕",
}
_LOG_ICON = "📝"


class ListPane(Generic[T]):
    """A titled list with a cursor, paged to fit its height."""

    title = ""
    empty_message = ""

    def __init__(self, items: Sequence[T] = ()) -> None:
        self.items: List[T] = list(items)
        self.cursor = 0
        self.width = 0
        self.height = 0

    def _visible_rows(self) -> int:
        if self.height <= 0:
            return max(1, len(self.items))
        return max(1, self.height - 2)

    def handle_key(self, key: str) -> bool:
        """Move the cursor; return whether the key was used."""
        if not self.items:
            return False
        last = len(self.items) - 1
        page = self._visible_rows()
        if key in ("up", "k"):
            self.cursor = max(0, self.cursor - 1)
        elif key in ("down", "j"):
            self.cursor = min(last, self.cursor + 1)
        elif key in ("home", "g"):
            self.cursor = 0
        elif key in ("end", "G"):
            self.cursor = last
        elif key == "pgup":
            self.cursor = max(0, self.cursor - page)
        elif key == "pgdown":
            self.cursor = min(last, self.cursor + page)
        else:
            return False
        return True

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the items, keeping the cursor within range."""
        self.items = list(items)
        self.cursor = min(self.cursor, max(0, len(self.items) - 1))

    def selected(self) -> Optional[T]:
        """Return the item under the cursor, or None if the list is empty."""
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None

    def render_item(self, item: T, selected: bool) -> str:
        text = str(item)
        return SELECTED_PREFIX + text if selected else text

    def view(self) -> str:
        """Return the pane as text: title, blank line, then the page holding the cursor."""
        if not self.items:
            return f"{self.title}\n\n{self.empty_message}"
        rows = self._visible_rows()
        start = (self.cursor // rows) * rows
        lines = [self.title, ""]
        for offset, item in enumerate(self.items[start:start + rows]):
            lines.append(self.render_item(item, start + offset == self.cursor))
        if self.width > 0:
            lines = [line[: self.width] for line in lines]
        return "\n".join(lines)


class IntentionList(ListPane[Intention]):
    """The day's intentions with their status marks."""

    title = "Intentions"
    empty_message = "No intentions yet - press i to add one"

    def render_item(self, item: Intention, selected: bool) -> str:
        symbol = _STATUS_SYMBOLS.get(item.status, _OPEN_SYMBOL)
        text = f"{symbol} {item.text}"
        if item.status is IntentionStatus.CARRIED and item.carried_from:
            text += f" (from {item.carried_from})"
        return SELECTED_PREFIX + text if selected else text


class LogView(ListPane[LogEntry]):
    """The day's log entries with their times and kinds."""

    title = "Log Entries"
    empty_message = "No log entries yet - press L to add one"

    def render_item(self, item: LogEntry, selected: bool) -> str:
        icon = _ENTRY_ICONS.get(item.entry_type, _LOG_ICON)
        text = f"{item.timestamp.strftime('%H:%M')} {icon}: {item.content}"
        return SELECTED_PREFIX + text if selected else text


class WinsView(ListPane[Win]):
    """The day's wins."""

    title = "Wins"
    empty_message = "No wins yet - press w to add one"

    def render_item(self, item: Win, selected: bool) -> str:
        text = f"🏆 {item.text}"
        return SELECTED_PREFIX + text if selected else text