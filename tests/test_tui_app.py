import curses
from unittest.mock import patch

import pytest

from reckon.journal.repository import JournalRepository
from reckon.journal.service import JournalService
from reckon.storage.database import Database
from reckon.storage.filesystem import FileStore
from reckon.tui.app import key_name, run
from reckon.tui.model import Model


@pytest.mark.parametrize(
    "code, expected",
    [
        (curses.KEY_LEFT, "left"),
        (curses.KEY_RIGHT, "right"),
        (curses.KEY_BTAB, "shift+tab"),
        (9, "tab"),
        ("\t", "tab"),
        (27, "esc"),
        ("\n", "enter"),
        (13, "enter"),
        (20, "ctrl+t"),
        ("\x0e", "ctrl+n"),
        (3, "ctrl+c"),
        ("q", "q"),
        (ord("L"), "L"),
        ("?", "?"),
    ],
)
def test_key_name(code, expected):
    assert key_name(code) == expected


def test_key_name_backspace_variants_agree():
    assert key_name(127) == key_name(curses.KEY_BACKSPACE) == key_name("\x7f")


@pytest.mark.parametrize("code", [-1, "ab", ""])
def test_key_name_unknown(code):
    assert key_name(code) is None


class _FakeScreen:
    def __init__(self, keys):
        self.keys = list(keys)
        self.drawn = []

    def getmaxyx(self):
        return (30, 100)

    def timeout(self, ms):
        self.timeout_ms = ms

    def erase(self):
        self.drawn = []

    def addnstr(self, row, col, text, limit):
        self.drawn.append(text[:limit])

    def refresh(self):
        pass

    def get_wch(self):
        key = self.keys.pop(0)
        if key is None:
            raise curses.error("no input")
        return key


def test_run_drives_model_until_quit(tmp_path):
    db = Database(tmp_path / "test.db")
    service = JournalService(JournalRepository(db), FileStore(root=tmp_path / "data"))
    model = Model(service)
    screen = _FakeScreen(["i", "a", None, "b", "\n", "q"])

    with patch("curses.wrapper", side_effect=lambda fn, *args: fn(screen, *args)), patch(
        "curses.curs_set"
    ):
        run(model)
    db.close()

    assert model.should_quit
    assert [i.text for i in model.current_journal.intentions] == ["ab"]
    assert model.width == 100
    assert any("Intentions" in line for line in screen.drawn)