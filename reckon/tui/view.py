"""Turning the screen model into text."""

from __future__ import annotations

import unicodedata
from typing import List, Optional, Sequence

from reckon.tui.model import MIN_TERMINAL_HEIGHT, MIN_TERMINAL_WIDTH, Model, Pane

HELP_TEXT = """Help - Key Bindings:

Navigation:
  h, ←       Previous day
  l, →       Next day
  t          Jump to today
  tab        Next section / Switch panes (in two-pane mode)
  shift+tab  Previous section

Actions:
  i          Add intention
  w          Add win
  L          Add log entry (or log to task if in task pane)
  enter      Toggle intention (in intentions section)

Task Management:
  ctrl+t     Open task picker
  ctrl+n     Create new task
  ctrl+w     Close task (exit two-pane mode)

Input Mode:
  enter      Submit
  esc        Cancel
  backspace  Delete character
  any key    Add character

General:
  q, ctrl+c  Quit
  ?          Toggle help

Press ? to exit help."""

INPUT_HINT = "(Enter to submit, Esc to cancel)"
LOADING = "Loading..."

_BORDER = "│"
_ACTIVE_BORDER = "┃"


def _char_width(char: str) -> int:
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def _width(text: str) -> int:
    return sum(_char_width(char) for char in text)


def _block_width(lines: Sequence[str]) -> int:
    return max((_width(line) for line in lines), default=0)


def _pad(line: str, width: int) -> str:
    return line + " " * max(0, width - _width(line))


def _box(text: str, content_width: Optional[int] = None, center: bool = False) -> str:
    """Frame ``text`` in a rounded border with one line and two columns of padding."""
    lines = text.split("\n")
    width = max(_block_width(lines), content_width or 0)

    def fit(line: str) -> str:
        gap = max(0, width - _width(line))
        left = gap // 2 if center else 0
        return " " * left + line + " " * (gap - left)

    inner_width = width + 4
    blank = " " * inner_width
    rows = [blank, *(f"  {fit(line)}  " for line in lines), blank]
    top = "╭" + "─" * inner_width + "╮"
    bottom = "╰" + "─" * inner_width + "╯"
    return "\n".join([top, *(f"│{row}│" for row in rows), bottom])


def _place(width: int, height: int, block: str) -> str:
    """Centre ``block`` in an area of ``width`` by ``height``."""
    lines = block.split("\n")
    block_width = _block_width(lines)
    left = max(0, (width - block_width) // 2)
    top = max(0, (height - len(lines)) // 2)
    bottom = max(0, height - top - len(lines))
    full = max(width, left + block_width)
    body = [_pad(" " * left + line, full) for line in lines]
    return "\n".join([" " * full] * top + body + [" " * full] * bottom)


def _with_right_border(block: str, border: str = _BORDER) -> str:
    lines = block.split("\n")
    width = _block_width(lines)
    return "\n".join(_pad(line, width) + border for line in lines)


def _join_horizontal(blocks: Sequence[str]) -> str:
    """Place blocks side by side, aligned at the top."""
    split = [block.split("\n") for block in blocks]
    height = max((len(lines) for lines in split), default=0)
    widths = [_block_width(lines) for lines in split]
    rows: List[str] = []
    for row in range(height):
        parts = [
            _pad(lines[row] if row < len(lines) else "", width)
            for lines, width in zip(split, widths)
        ]
        rows.append("".join(parts).rstrip() if False else "".join(parts))
    return "\n".join(rows)


def terminal_too_small_view(model: Model) -> str:
    """Return the notice shown when the terminal is below the minimum size."""
    content = (
        "Terminal Too Small\n\n"
        f"Current: {model.width}x{model.height}\n\n"
        f"Required: {MIN_TERMINAL_WIDTH}x{MIN_TERMINAL_HEIGHT} or larger\n\n"
        "Resize your terminal and restart Reckon."
    )
    return _box(content, center=True)


def help_view(model: Model) -> str:
    """Return the key binding help followed by the status line."""
    return HELP_TEXT + "\n\n" + model.status_bar.view()


def _input_view(model: Model) -> str:
    view = model.text_input.view() + "\n\n" + INPUT_HINT
    if model.last_error is not None:
        view += f"\n\nError: {model.last_error}"
    return view


def _two_pane_view(model: Model, pane_height: int) -> str:
    journal_width = model.width // 2
    task_width = model.width - journal_width

    journal_view = ""
    if model.log_view is not None:
        model.log_view.set_size(journal_width - 1, pane_height)
        journal_view = model.log_view.view()

    model.task_view.set_size(task_width - 1, pane_height)
    border = _ACTIVE_BORDER if model.active_pane is Pane.JOURNAL else _BORDER
    return _join_horizontal(
        [_with_right_border(journal_view, border), model.task_view.view()]
    )


def _three_pane_view(model: Model, pane_height: int) -> str:
    side = int(model.width * 0.25)
    logs = model.width - 2 * side
    panes = (
        (model.intention_list, side),
        (model.wins_view, side),
        (model.log_view, logs),
    )
    views = []
    for pane, width in panes:
        if pane is not None:
            pane.set_size(width, pane_height)
            views.append(pane.view())
        else:
            views.append("")
    intentions, wins, log = views
    return _join_horizontal(
        [_with_right_border(intentions), _with_right_border(wins), log]
    )


def render(model: Model) -> str:
    """Return the whole screen for the model's current state."""
    if model.terminal_too_small:
        return terminal_too_small_view(model)

    if model.current_journal is None:
        return LOADING

    if model.task_picker_mode and model.task_picker is not None:
        picker = _box(model.task_picker.view(), content_width=max(0, model.width // 2 - 4))
        return _place(model.width, model.height, picker)

    if model.input_mode:
        return _input_view(model)

    if model.help_mode:
        return help_view(model)

    pane_height = model.height - 2
    if model.showing_tasks and model.task_view is not None:
        content = _two_pane_view(model, pane_height)
    else:
        content = _three_pane_view(model, pane_height)

    model.status_bar.current_date = model.current_date
    return content + "\n" + model.status_bar.view()