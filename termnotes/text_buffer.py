"""Cursor-aware text editing primitive.

The buffer keeps the whole text as one string and the cursor as a character
offset into it. Offset ``len(text)`` is the virtual position after the last
character. Every operation clamps instead of failing, so
``0 <= cursor <= len(text)`` holds after any sequence of calls.
"""

from __future__ import annotations

from dataclasses import dataclass

NEWLINE = "\n"


@dataclass
class TextBuffer:
    """Editable text with a cursor offset."""

    text: str = ""
    cursor: int = 0
    multiline: bool = True

    def __post_init__(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    @classmethod
    def from_text(cls, text: str, *, multiline: bool = True) -> "TextBuffer":
        """Seed a buffer with existing text; the cursor starts at the end."""
        return cls(text=text, cursor=len(text), multiline=multiline)

    # -- editing ---------------------------------------------------------

    def insert(self, chars: str) -> None:
        if not chars:
            return
        if not self.multiline:
            chars = chars.replace("\r", "").replace(NEWLINE, " ")
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)

    def insert_newline(self) -> None:
        if not self.multiline:
            return
        self.text = self.text[: self.cursor] + NEWLINE + self.text[self.cursor :]
        self.cursor += 1

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    # -- horizontal movement ---------------------------------------------

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def move_home(self) -> None:
        self.cursor = self._line_start(self.cursor)

    def move_end(self) -> None:
        end = self.text.find(NEWLINE, self.cursor)
        self.cursor = len(self.text) if end == -1 else end

    # -- vertical movement -----------------------------------------------

    def move_up(self) -> None:
        """Move to the previous line, keeping the column where that line allows."""
        start = self._line_start(self.cursor)
        if start == 0:
            return
        column = self.cursor - start
        prev_end = start - 1
        prev_start = self._line_start(prev_end)
        self.cursor = prev_start + min(column, prev_end - prev_start)

    def move_down(self) -> None:
        """Move to the next line, keeping the column where that line allows."""
        newline_at = self.text.find(NEWLINE, self.cursor)
        if newline_at == -1:
            return
        column = self.cursor - self._line_start(self.cursor)
        next_start = newline_at + 1
        next_end = self.text.find(NEWLINE, next_start)
        if next_end == -1:
            next_end = len(self.text)
        self.cursor = next_start + min(column, next_end - next_start)

    # -- queries -----------------------------------------------------------

    def lines(self) -> list[str]:
        return self.text.split(NEWLINE)

    def line_and_column(self) -> tuple[int, int]:
        """Zero-based (line, column) of the cursor."""
        before = self.text[: self.cursor]
        line = before.count(NEWLINE)
        return line, self.cursor - self._line_start(self.cursor)

    @property
    def on_first_line(self) -> bool:
        return NEWLINE not in self.text[: self.cursor]

    def _line_start(self, offset: int) -> int:
        return self.text.rfind(NEWLINE, 0, offset) + 1
