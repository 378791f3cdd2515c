"""A single-line text field driven by key names."""

from __future__ import annotations

_BACKSPACE = {"backspace", "ctrl+h"}
_DELETE = {"delete", "ctrl+d"}
_LEFT = {"left", "ctrl+b"}
_RIGHT = {"right", "ctrl+f"}
_HOME = {"home", "ctrl+a"}
_END = {"end", "ctrl+e"}
_SPACE = {"space", " "}


class TextInput:
    """An editable line of text with a prompt, placeholder and length limit.

    A ``char_limit`` of 0 means no limit. Keys are ignored unless focused.
    """

    def __init__(self, prompt: str = "> ", placeholder: str = "", char_limit: int = 0) -> None:
        self.prompt = prompt
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.value = ""
        self.cursor = 0
        self.width = 0
        self.focused = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def set_value(self, value: str) -> None:
        """Replace the text, cut to the limit, with the cursor at the end."""
        if self.char_limit > 0:
            value = value[: self.char_limit]
        self.value = value
        self.cursor = len(value)

    def clear(self) -> None:
        """Empty the field."""
        self.set_value("")

    def handle_key(self, key: str) -> bool:
        """Apply a key; return whether the field used it."""
        if not self.focused:
            return False

        before, after = self.value[: self.cursor], self.value[self.cursor:]
        if key in _BACKSPACE:
            if before:
                self.value = before[:-1] + after
                self.cursor -= 1
        elif key in _DELETE:
            self.value = before + after[1:]
        elif key in _LEFT:
            self.cursor = max(0, self.cursor - 1)
        elif key in _RIGHT:
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in _HOME:
            self.cursor = 0
        elif key in _END:
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = after
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = before
        else:
            char = " " if key in _SPACE else key
            if len(char) != 1 or not char.isprintable():
                return False
            if self.char_limit <= 0 or len(self.value) < self.char_limit:
                self.value = before + char + after
                self.cursor += 1
        return True

    def view(self) -> str:
        """Return the prompt followed by the text, or the placeholder when empty."""
        if not self.value:
            return self.prompt + self.placeholder
        text = self.value
        if self.width > 0 and len(text) > self.width:
            text = text[-self.width:]
        return self.prompt + text