"""The status line at the bottom of the screen."""

from __future__ import annotations

import datetime as dt

HINTS = "q:quit tab:switch i:intention w:win L:log h/l:nav t:today ?:help enter:toggle"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class StatusBar:
    """Shows the date being viewed and the key hints, fitted to ``width``."""

    def __init__(self) -> None:
        self.width = 0
        self.current_date = ""

    def format_date(self) -> str:
        """Return ``Today``, a friendly date such as ``Mon, Jan 2, 2006``, or the raw text."""
        if not self.current_date:
            return ""
        if self.current_date == dt.date.today().strftime("%Y-%m-%d"):
            return "Today"
        try:
            date = dt.datetime.strptime(self.current_date, "%Y-%m-%d").date()
        except ValueError:
            return self.current_date
        return f"{_DAYS[date.weekday()]}, {_MONTHS[date.month - 1]} {date.day}, {date.year}"

    def view(self) -> str:
        """Return the status line, padded by one space on each side."""
        date_display = self.format_date()
        hints = HINTS
        date_len = len(date_display)

        if date_len + len(hints) + 3 > self.width:
            available = self.width - date_len - 5
            if 0 < available < len(hints):
                hints = hints[:available] + "..."

        spacer = " " * max(0, self.width - date_len - len(hints) - 2)
        content = date_display + spacer + hints
        return f" {content.ljust(max(0, self.width - 2))} "