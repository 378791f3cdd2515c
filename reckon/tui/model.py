"""State and key handling of the interactive journal screen."""

from __future__ import annotations

import datetime as dt
import sqlite3
from enum import Enum, IntEnum
from typing import Optional

from reckon.journal.models import Journal
from reckon.journal.service import JournalService
from reckon.task.models import Status, Task
from reckon.tui.lists import IntentionList, LogView, WinsView
from reckon.tui.status_bar import StatusBar
from reckon.tui.task_picker import TaskPicker
from reckon.tui.task_view import TaskView
from reckon.tui.text_input import TextInput

MIN_TERMINAL_WIDTH = 80
MIN_TERMINAL_HEIGHT = 24

_DATE_FORMAT = "%Y-%m-%d"
_ERRORS = (OSError, sqlite3.Error, LookupError, ValueError, RuntimeError)


class Section(IntEnum):
    """The journal pane that has focus."""

    INTENTIONS = 0
    WINS = 1
    LOGS = 2


class Pane(IntEnum):
    """The active side in two-pane mode."""

    JOURNAL = 0
    TASK = 1


class InputType(str, Enum):
    """What the text being typed will become."""

    INTENTION = "intention"
    WIN = "win"
    LOG = "log"
    TASK = "task"
    TASK_LOG = "task_log"


def is_too_small(width: int, height: int) -> bool:
    """Return whether a terminal of this size is below the minimum."""
    return width < MIN_TERMINAL_WIDTH or height < MIN_TERMINAL_HEIGHT


def _today() -> str:
    return dt.date.today().strftime(_DATE_FORMAT)


class Model:
    """Everything the screen shows, changed by keys and file changes."""

    def __init__(self, service: JournalService, task_service=None, watcher=None) -> None:
        self.service = service
        self.task_service = task_service
        self.watcher = watcher
        self.current_date = _today()
        self.current_journal: Optional[Journal] = None
        self.focused_section = Section.INTENTIONS
        self.width = 0
        self.height = 0

        self.intention_list: Optional[IntentionList] = None
        self.wins_view: Optional[WinsView] = None
        self.log_view: Optional[LogView] = None
        self.text_input = TextInput(prompt="", placeholder="", char_limit=200)
        self.text_input.width = 50
        self.status_bar = StatusBar()
        self.status_bar.current_date = self.current_date

        self.current_task: Optional[Task] = None
        self.task_view: Optional[TaskView] = None
        self.task_picker: Optional[TaskPicker] = None
        self.active_pane = Pane.JOURNAL
        self.showing_tasks = False

        self.input_mode = False
        self.input_type: Optional[InputType] = None
        self.help_mode = False
        self.task_picker_mode = False
        self.last_error: Optional[BaseException] = None
        self.terminal_too_small = False
        self.should_quit = False

    # Layout

    def resize(self, width: int, height: int) -> None:
        """Record the terminal size and fit the panes to it."""
        self.width = width
        self.height = height
        self.terminal_too_small = is_too_small(width, height)
        self.status_bar.width = width
        if not self.terminal_too_small:
            self._size_panes()

    def _size_panes(self) -> None:
        side = int(self.width * 0.25)
        logs = self.width - 2 * side
        pane_height = self.height - 2
        if self.intention_list is not None:
            self.intention_list.set_size(side, pane_height)
        if self.wins_view is not None:
            self.wins_view.set_size(side, pane_height)
        if self.log_view is not None:
            self.log_view.set_size(logs, pane_height)

    # Loading

    def load_journal(self) -> None:
        """Load the journal for the current date into the panes."""
        try:
            journal = self.service.get_by_date(self.current_date)
        except _ERRORS as exc:
            self._fail(exc)
            return
        self.current_journal = journal
        self.intention_list = IntentionList(journal.intentions)
        self.wins_view = WinsView(journal.wins)
        self.log_view = LogView(journal.log_entries)
        self.status_bar.current_date = self.current_date
        if self.width and not self.terminal_too_small:
            self._size_panes()

    def load_task(self, task_id: str) -> None:
        """Load a task and show it beside the journal."""
        if self.task_service is None:
            self._fail(RuntimeError("task service not available"))
            return
        try:
            task = self.task_service.get_by_id(task_id)
        except _ERRORS as exc:
            self._fail(exc)
            return
        self._show_task(task)

    def open_task_picker(self) -> None:
        """Open the picker over the active tasks."""
        if self.task_service is None:
            self._fail(RuntimeError("task service not available"))
            return
        try:
            tasks = self.task_service.list(Status.ACTIVE, [])
        except _ERRORS as exc:
            self._fail(exc)
            return
        self.task_picker = TaskPicker(tasks)
        self.task_picker.set_size(self.width // 2, self.height - 4)
        self.task_picker_mode = True

    def poll_file_changes(self) -> bool:
        """Drain pending file changes; reload and return True if today's view changed."""
        if self.watcher is None:
            return False
        reload = False
        while (event := self.watcher.next_change(timeout=0)) is not None:
            if event.date == self.current_date:
                reload = True
        if reload:
            self.load_journal()
        return reload

    # Navigation

    def prev_day(self) -> None:
        date = dt.datetime.strptime(self.current_date, _DATE_FORMAT).date()
        self.current_date = (date - dt.timedelta(days=1)).strftime(_DATE_FORMAT)
        self.load_journal()

    def next_day(self) -> None:
        """Move one day forward, never past today."""
        date = dt.datetime.strptime(self.current_date, _DATE_FORMAT).date()
        new_date = (date + dt.timedelta(days=1)).strftime(_DATE_FORMAT)
        if new_date > _today():
            return
        self.current_date = new_date
        self.load_journal()

    def jump_to_today(self) -> None:
        self.current_date = _today()
        self.load_journal()

    # Actions

    def toggle_intention(self, intention_id: str) -> None:
        """Flip an intention between open and done."""
        try:
            self.service.toggle_intention(self.current_journal, intention_id)
        except _ERRORS as exc:
            self._fail(exc)
            return
        self._journal_updated()

    def submit_input(self) -> None:
        """Act on the typed text according to the input type."""
        text = self.text_input.value
        if not text:
            return
        kind = self.input_type
        try:
            if kind is InputType.TASK and self.task_service is not None:
                self._show_task(self.task_service.create(text, []))
                return
            if (
                kind is InputType.TASK_LOG
                and self.task_service is not None
                and self.current_task is not None
            ):
                task_id = self.current_task.id
                self.task_service.append_log(task_id, text)
                self._reset_input()
                self.load_task(task_id)
                self.load_journal()
                return
            journal = self.current_journal
            if journal is not None:
                if kind is InputType.INTENTION:
                    self.service.add_intention(journal, text)
                elif kind is InputType.WIN:
                    self.service.add_win(journal, text)
                elif kind is InputType.LOG:
                    self.service.append_log(journal, text)
        except _ERRORS as exc:
            self._fail(exc)
            return
        self._journal_updated()

    # Keys

    def handle_key(self, key: str) -> None:
        """Apply one key press."""
        if self.task_picker_mode:
            if key == "enter":
                selected = self.task_picker.selected_task() if self.task_picker else None
                if selected is not None:
                    self.load_task(selected.id)
                    return
                self.task_picker_mode = False
                return
            if key == "esc":
                self.task_picker_mode = False
                return
            if self.task_picker is not None:
                self.task_picker.handle_key(key)
                return

        if self.input_mode:
            if key == "enter":
                self.submit_input()
            elif key == "esc":
                self._reset_input()
            else:
                self.text_input.handle_key(key)
            return

        self._handle_normal_key(key)

    def _handle_normal_key(self, key: str) -> None:
        sections = len(Section)
        if key in ("q", "ctrl+c"):
            if self.watcher is not None:
                self.watcher.stop()
            self.should_quit = True
        elif key == "tab":
            if self.showing_tasks:
                self.active_pane = Pane.TASK if self.active_pane is Pane.JOURNAL else Pane.JOURNAL
            else:
                self.focused_section = Section((self.focused_section + 1) % sections)
        elif key == "shift+tab":
            self.focused_section = Section((self.focused_section + sections - 1) % sections)
        elif key == "ctrl+t":
            if self.task_service is not None:
                self.open_task_picker()
        elif key == "ctrl+n":
            if self.task_service is not None:
                self._begin_input(InputType.TASK, "New task title: ", "Enter task title")
        elif key == "ctrl+w":
            if self.showing_tasks:
                self.showing_tasks = False
                self.current_task = None
                self.task_view = None
                self.active_pane = Pane.JOURNAL
        elif key in ("h", "left"):
            self.prev_day()
        elif key in ("l", "right"):
            self.next_day()
        elif key == "t":
            self.jump_to_today()
        elif key == "?":
            self.help_mode = not self.help_mode
        elif key == "i":
            self._begin_input(
                InputType.INTENTION, "Add intention: ", "What do you intend to accomplish?"
            )
        elif key == "w":
            self._begin_input(InputType.WIN, "Add win: ", "What did you accomplish?")
        elif key == "L":
            if (
                self.showing_tasks
                and self.active_pane is Pane.TASK
                and self.current_task is not None
            ):
                self._begin_input(InputType.TASK_LOG, "Log to task: ", "What did you do?")
            else:
                self._begin_input(InputType.LOG, "Add log entry: ", "What did you do?")
        elif key == "enter":
            if self.focused_section is Section.INTENTIONS and self.intention_list is not None:
                intention = self.intention_list.selected()
                if intention is not None:
                    self.toggle_intention(intention.id)
        else:
            pane = {
                Section.INTENTIONS: self.intention_list,
                Section.WINS: self.wins_view,
                Section.LOGS: self.log_view,
            }[self.focused_section]
            if pane is not None:
                pane.handle_key(key)

    # Helpers

    def _begin_input(self, kind: InputType, prompt: str, placeholder: str) -> None:
        self.input_mode = True
        self.input_type = kind
        self.text_input.prompt = prompt
        self.text_input.placeholder = placeholder
        self.text_input.clear()
        self.text_input.focus()

    def _reset_input(self) -> None:
        self.input_mode = False
        self.text_input.clear()
        self.text_input.blur()

    def _journal_updated(self) -> None:
        if self.input_mode:
            self._reset_input()
        self.load_journal()

    def _show_task(self, task: Task) -> None:
        if self.input_mode:
            self._reset_input()
        self.current_task = task
        self.task_view = TaskView(task)
        self.showing_tasks = True
        self.active_pane = Pane.TASK
        self.task_picker_mode = False

    def _fail(self, exc: BaseException) -> None:
        if self.input_mode:
            self._reset_input()
        self.last_error = exc