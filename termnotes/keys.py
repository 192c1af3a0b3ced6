"""Keystroke decoding.

``click.getchar()`` returns whatever bytes one key produced: a printable
character, a control character, an ANSI escape sequence, or a two-character
Windows scan code. ``decode_key`` turns those into ``KeyEvent`` values so the
controllers never see raw terminal input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyName(str, Enum):
    """Non-printable keys the controllers react to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keystroke.

    Exactly one of ``name`` or ``char`` is set for keys the app understands.
    Control combinations carry the lowercase letter in ``char`` with ``ctrl``.
    """

    char: str = ""
    name: KeyName | None = None
    ctrl: bool = False

    @classmethod
    def text(cls, chars: str) -> "KeyEvent":
        return cls(char=chars)

    @classmethod
    def named(cls, name: KeyName) -> "KeyEvent":
        return cls(name=name)

    @classmethod
    def control(cls, letter: str) -> "KeyEvent":
        return cls(char=letter.lower(), ctrl=True)

    def is_(self, name: KeyName) -> bool:
        return self.name is name

    def is_ctrl(self, letter: str) -> bool:
        return self.ctrl and self.char == letter

    @property
    def printable(self) -> str:
        """Text this key inserts into a buffer, or an empty string."""
        if self.ctrl or self.name is not None:
            return ""
        return self.char


ESCAPE_SEQUENCES: dict[str, KeyName] = {
    "\x1b[A": KeyName.UP,
    "\x1b[B": KeyName.DOWN,
    "\x1b[C": KeyName.RIGHT,
    "\x1b[D": KeyName.LEFT,
    "\x1bOA": KeyName.UP,
    "\x1bOB": KeyName.DOWN,
    "\x1bOC": KeyName.RIGHT,
    "\x1bOD": KeyName.LEFT,
    "\x1b[H": KeyName.HOME,
    "\x1b[F": KeyName.END,
    "\x1bOH": KeyName.HOME,
    "\x1bOF": KeyName.END,
    "\x1b[1~": KeyName.HOME,
    "\x1b[4~": KeyName.END,
    "\x1b[7~": KeyName.HOME,
    "\x1b[8~": KeyName.END,
    "\x1b[3~": KeyName.DELETE,
}

# Second character of the Windows console's "\x00" / "\xe0" prefixed codes.
WINDOWS_SCAN_CODES: dict[str, KeyName] = {
    "H": KeyName.UP,
    "P": KeyName.DOWN,
    "K": KeyName.LEFT,
    "M": KeyName.RIGHT,
    "G": KeyName.HOME,
    "O": KeyName.END,
    "S": KeyName.DELETE,
}

SINGLE_CONTROL: dict[str, KeyName] = {
    "\x1b": KeyName.ESCAPE,
    "\r": KeyName.ENTER,
    "\n": KeyName.ENTER,
    "\r\n": KeyName.ENTER,
    "\t": KeyName.TAB,
    "\x7f": KeyName.BACKSPACE,
    "\x08": KeyName.BACKSPACE,
}

UNKNOWN = KeyEvent()


def decode_key(raw: str) -> KeyEvent:
    """Decode the string produced by a single key press."""
    if not raw:
        return UNKNOWN

    if raw in SINGLE_CONTROL:
        return KeyEvent.named(SINGLE_CONTROL[raw])

    if raw.startswith("\x1b"):
        name = ESCAPE_SEQUENCES.get(raw)
        if name:
            return KeyEvent.named(name)
        if raw[1] in "[O":
            return UNKNOWN
        # ESC arrived in the same read as the next key.
        return KeyEvent.named(KeyName.ESCAPE)

    if len(raw) == 2 and raw[0] in ("\x00", "\xe0"):
        name = WINDOWS_SCAN_CODES.get(raw[1])
        return KeyEvent.named(name) if name else UNKNOWN

    if len(raw) == 1 and 1 <= ord(raw) <= 26:
        return KeyEvent.control(chr(ord(raw) + 96))

    # Pasted text arrives as one chunk; keep its printable characters.
    text = "".join(ch for ch in raw if ch == "\n" or ch.isprintable())
    return KeyEvent.text(text) if text else UNKNOWN
