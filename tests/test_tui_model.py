import datetime as dt

import pytest

from reckon.journal.models import IntentionStatus
from reckon.journal.repository import JournalRepository
from reckon.journal.service import IntentionNotFoundError, JournalService
from reckon.storage.database import Database
from reckon.storage.filesystem import FileStore
from reckon.task.repository import TaskNotFoundError, TaskRepository
from reckon.task.service import TaskService
from reckon.tui.model import InputType, Model, Pane, Section, is_too_small
from reckon.watcher import FileChangeEvent


@pytest.fixture
def services(tmp_path):
    db = Database(tmp_path / "index.db")
    store = FileStore(root=tmp_path / "data")
    journal_service = JournalService(JournalRepository(db), store)
    task_service = TaskService(TaskRepository(db), journal_service)
    yield journal_service, task_service
    db.close()


@pytest.fixture
def model(services):
    journal_service, task_service = services
    m = Model(journal_service, task_service)
    m.load_journal()
    return m


def _type(model, text):
    for ch in text:
        model.handle_key(ch)


def _today():
    return dt.date.today().strftime("%Y-%m-%d")


class _StubWatcher:
    def __init__(self, events):
        self.events = list(events)
        self.stopped = False

    def next_change(self, timeout=None):
        return self.events.pop(0) if self.events else None

    def stop(self):
        self.stopped = True


@pytest.mark.parametrize(
    "width, height, expected",
    [
        (60, 25, True),
        (80, 20, True),
        (60, 20, True),
        (80, 24, False),
        (120, 40, False),
        (79, 24, True),
        (80, 23, True),
    ],
)
def test_terminal_too_small_validation(width, height, expected):
    assert is_too_small(width, height) is expected


def test_resize_sets_flag_and_pane_sizes(model):
    model.resize(60, 20)
    assert model.terminal_too_small is True
    model.resize(100, 30)
    assert model.terminal_too_small is False
    assert model.status_bar.width == 100
    assert model.intention_list.width == 25
    assert model.wins_view.width == 25
    assert model.log_view.width == 50
    assert model.log_view.height == 28


def test_load_journal_for_today(model):
    assert model.current_journal.date == _today()
    assert model.intention_list.items == []
    assert model.status_bar.current_date == _today()


def test_add_intention_through_keys(model):
    model.handle_key("i")
    assert model.input_mode is True
    assert model.input_type is InputType.INTENTION
    _type(model, "Write tests")
    model.handle_key("enter")
    assert model.input_mode is False
    assert [i.text for i in model.current_journal.intentions] == ["Write tests"]
    assert model.text_input.value == ""


def test_add_win_and_log(model):
    model.handle_key("w")
    _type(model, "Shipped")
    model.handle_key("enter")
    model.handle_key("L")
    assert model.input_type is InputType.LOG
    _type(model, "Reviewed")
    model.handle_key("enter")
    assert [w.text for w in model.current_journal.wins] == ["Shipped"]
    assert [e.content for e in model.current_journal.log_entries] == ["Reviewed"]


def test_empty_submit_keeps_input_open(model):
    model.handle_key("w")
    model.handle_key("enter")
    assert model.input_mode is True
    assert model.current_journal.wins == []


def test_escape_cancels_input(model):
    model.handle_key("i")
    _type(model, "draft")
    model.handle_key("esc")
    assert model.input_mode is False
    assert model.text_input.value == ""
    assert model.current_journal.intentions == []


def test_enter_toggles_selected_intention(model):
    model.handle_key("i")
    _type(model, "Read")
    model.handle_key("enter")
    model.handle_key("enter")
    assert model.current_journal.intentions[0].status is IntentionStatus.DONE
    model.handle_key("enter")
    assert model.current_journal.intentions[0].status is IntentionStatus.OPEN


def test_tab_cycles_sections(model):
    model.handle_key("tab")
    assert model.focused_section is Section.WINS
    model.handle_key("tab")
    model.handle_key("tab")
    assert model.focused_section is Section.INTENTIONS
    model.handle_key("shift+tab")
    assert model.focused_section is Section.LOGS


def test_day_navigation_stops_at_today(model):
    today = _today()
    yesterday = (dt.date.today() - dt.timedelta(days=1)).strftime("%Y-%m-%d")
    model.handle_key("l")
    assert model.current_date == today
    model.handle_key("h")
    assert model.current_date == yesterday
    assert model.current_journal.date == yesterday
    model.handle_key("right")
    assert model.current_date == today
    model.handle_key("left")
    model.handle_key("t")
    assert model.current_date == today


def test_help_toggles(model):
    model.handle_key("?")
    assert model.help_mode is True
    model.handle_key("?")
    assert model.help_mode is False


def test_quit_stops_watcher(services):
    journal_service, _ = services
    watcher = _StubWatcher([])
    m = Model(journal_service, None, watcher)
    m.handle_key("q")
    assert m.should_quit is True
    assert watcher.stopped is True


def test_create_task_enters_two_pane_mode(model):
    model.handle_key("ctrl+n")
    assert model.input_type is InputType.TASK
    _type(model, "Refactor")
    model.handle_key("enter")
    assert model.showing_tasks is True
    assert model.active_pane is Pane.TASK
    assert model.current_task.title == "Refactor"
    assert model.input_mode is False
    model.handle_key("tab")
    assert model.active_pane is Pane.JOURNAL
    model.handle_key("tab")
    assert model.active_pane is Pane.TASK


def test_log_to_task_also_logs_to_journal(model):
    model.handle_key("ctrl+n")
    _type(model, "Refactor")
    model.handle_key("enter")
    task_id = model.current_task.id
    model.handle_key("L")
    assert model.input_type is InputType.TASK_LOG
    _type(model, "did it")
    model.handle_key("enter")
    assert [e.content for e in model.current_task.log_entries] == ["did it"]
    assert model.current_journal.log_entries[-1].content == f"[task:{task_id}] did it"


def test_close_task_leaves_two_pane_mode(model):
    model.handle_key("ctrl+n")
    _type(model, "Refactor")
    model.handle_key("enter")
    model.handle_key("ctrl+w")
    assert model.showing_tasks is False
    assert model.current_task is None
    assert model.active_pane is Pane.JOURNAL


def test_task_picker_filters_and_selects(model, services):
    _, task_service = services
    task_service.create("Alpha", [])
    task_service.create("Beta", [])
    model.handle_key("ctrl+t")
    assert model.task_picker_mode is True
    assert {t.title for t in model.task_picker.filtered_tasks} == {"Alpha", "Beta"}
    _type(model, "bet")
    assert [t.title for t in model.task_picker.filtered_tasks] == ["Beta"]
    model.handle_key("enter")
    assert model.task_picker_mode is False
    assert model.current_task.title == "Beta"


def test_task_picker_escape(model, services):
    _, task_service = services
    task_service.create("Alpha", [])
    model.handle_key("ctrl+t")
    model.handle_key("esc")
    assert model.task_picker_mode is False
    assert model.current_task is None


def test_task_keys_ignored_without_task_service(services):
    journal_service, _ = services
    m = Model(journal_service)
    m.load_journal()
    m.handle_key("ctrl+t")
    m.handle_key("ctrl+n")
    assert m.task_picker_mode is False
    assert m.input_mode is False


def test_toggle_missing_intention_records_error(model):
    model.handle_key("i")
    _type(model, "Read")
    model.handle_key("enter")
    model.toggle_intention("missing")
    assert isinstance(model.last_error, IntentionNotFoundError)
    assert "missing" in str(model.last_error)
    assert [i.status for i in model.current_journal.intentions] == [IntentionStatus.OPEN]


def test_load_missing_task_records_error_and_resets_input(model):
    model.handle_key("i")
    _type(model, "x")
    model.load_task("nope")
    assert isinstance(model.last_error, TaskNotFoundError)
    assert model.input_mode is False


def test_poll_without_watcher(model):
    assert model.poll_file_changes() is False


def test_poll_reloads_only_for_current_date(services, tmp_path):
    journal_service, _ = services
    other = FileChangeEvent(file_path=tmp_path / "2000-01-01.md", date="2000-01-01")
    m = Model(journal_service, None, _StubWatcher([other]))
    assert m.poll_file_changes() is False
    assert m.current_journal is None
    today = FileChangeEvent(file_path=tmp_path / f"{_today()}.md", date=_today())
    m.watcher = _StubWatcher([today])
    assert m.poll_file_changes() is True
    assert m.current_journal.date == _today()