"""Running the interactive screen in a terminal."""

from __future__ import annotations

import curses
import os
from typing import Optional, Union

from reckon.tui.model import Model
from reckon.tui.view import render

_POLL_MS = 200

_FUNCTION_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdown",
    curses.KEY_BTAB: "shift+tab",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_DC: "delete",
}

_CONTROL_KEYS = {
    8: "backspace",
    9: "tab",
    10: "enter",
    13: "enter",
    27: "esc",
    127: "backspace",
}


def _char_name(code_point: int) -> Optional[str]:
    if code_point in _CONTROL_KEYS:
        return _CONTROL_KEYS[code_point]
    if 1 <= code_point <= 26:
        return f"ctrl+{chr(code_point + ord('a') - 1)}"
    if 0 <= code_point < 0x110000:
        char = chr(code_point)
        if char.isprintable():
            return char
    return None


def key_name(code: Union[int, str]) -> Optional[str]:
    """Return the key name for a curses key code or character, or None if unknown."""
    if isinstance(code, str):
        if len(code) != 1:
            return None
        return _char_name(ord(code))
    if code in _FUNCTION_KEYS:
        return _FUNCTION_KEYS[code]
    return _char_name(code)


def _draw(screen, text: str) -> None:
    height, width = screen.getmaxyx()
    screen.erase()
    for row, line in enumerate(text.split("\n")):
        if row >= height:
            break
        try:
            screen.addnstr(row, 0, line, max(0, width - 1))
        except curses.error:
            pass
    screen.refresh()


def _loop(screen, model: Model) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    screen.timeout(_POLL_MS)

    if model.watcher is not None:
        try:
            model.watcher.start()
        except OSError:
            model.watcher = None

    model.load_journal()
    height, width = screen.getmaxyx()
    model.resize(width, height)

    while not model.should_quit:
        model.poll_file_changes()
        _draw(screen, render(model))
        try:
            code = screen.get_wch()
        except curses.error:
            continue
        if code == curses.KEY_RESIZE:
            height, width = screen.getmaxyx()
            model.resize(width, height)
            continue
        name = key_name(code)
        if name:
            model.handle_key(name)


def run(model: Model) -> None:
    """Show the model in the terminal until the user quits."""
    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(_loop, model)
    finally:
        if model.watcher is not None:
            model.watcher.stop()