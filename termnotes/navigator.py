"""List mode: selection, scroll window and sort order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .keys import KeyEvent, KeyName
from .models import Note, Priority

# Title, spacing, footer and frame rows around the note rows.
CHROME_ROWS = 7

QUICK_PRIORITY_KEYS: dict[str, Priority] = {
    "1": Priority.HIGH,
    "2": Priority.MEDIUM,
    "3": Priority.LOW,
    "4": Priority.NONE,
}


class SortMode(str, Enum):
    PRIORITY_ASC = "priority-asc"
    PRIORITY_DESC = "priority-desc"
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"

    @property
    def label(self) -> str:
        return SORT_LABELS[self]

    def next(self) -> "SortMode":
        index = SORT_CYCLE.index(self)
        return SORT_CYCLE[(index + 1) % len(SORT_CYCLE)]


SORT_CYCLE: tuple[SortMode, ...] = (
    SortMode.PRIORITY_ASC,
    SortMode.PRIORITY_DESC,
    SortMode.DATE_ASC,
    SortMode.DATE_DESC,
)

SORT_LABELS: dict[SortMode, str] = {
    SortMode.PRIORITY_ASC: "Priority ↑",
    SortMode.PRIORITY_DESC: "Priority ↓",
    SortMode.DATE_ASC: "Date ↑",
    SortMode.DATE_DESC: "Date ↓",
}


def sort_notes(notes: Sequence[Note], mode: SortMode) -> list[Note]:
    """Return a sorted copy. ``sorted`` is stable, so ties keep collection order."""
    if mode in (SortMode.PRIORITY_ASC, SortMode.PRIORITY_DESC):
        return sorted(notes, key=lambda n: n.priority.rank, reverse=mode is SortMode.PRIORITY_DESC)
    return sorted(notes, key=lambda n: n.created, reverse=mode is SortMode.DATE_DESC)


def visible_rows(height: int) -> int:
    return max(1, height - CHROME_ROWS)


def scroll_offset(selected_index: int, count: int, visible: int) -> int:
    """First row of the window, centred on the selection where possible."""
    if count <= visible:
        return 0
    offset = selected_index - visible // 2
    return max(0, min(offset, count - visible))


class ListAction(str, Enum):
    NONE = "none"
    ADD = "add"
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    SET_PRIORITY = "set_priority"
    TOGGLE_OBSCURED = "toggle_obscured"
    QUIT = "quit"


@dataclass(frozen=True)
class ListEvent:
    action: ListAction
    note_id: str | None = None
    priority: Priority | None = None


IDLE = ListEvent(ListAction.NONE)


class ListNavigator:
    """Selection state over the sorted note list."""

    def __init__(self, sort_mode: SortMode = SortMode.PRIORITY_ASC):
        self.selected_index = 0
        self.sort_mode = sort_mode

    def clamp(self, count: int) -> None:
        self.selected_index = max(0, min(self.selected_index, count - 1))

    def move(self, delta: int, count: int) -> None:
        self.selected_index += delta
        self.clamp(count)

    def jump_first(self) -> None:
        self.selected_index = 0

    def jump_last(self, count: int) -> None:
        self.selected_index = max(0, count - 1)

    def cycle_sort(self) -> None:
        self.sort_mode = self.sort_mode.next()
        self.selected_index = 0

    def window(self, count: int, height: int) -> tuple[int, int]:
        """(offset, size) of the rows to draw for a terminal ``height`` rows tall."""
        rows = visible_rows(height)
        return scroll_offset(self.selected_index, count, rows), min(rows, count)

    def handle_key(self, key: KeyEvent, notes: Sequence[Note]) -> ListEvent:
        """Handle one key against the already sorted ``notes``."""
        count = len(notes)
        char = key.printable

        if char == "q" or key.is_(KeyName.ESCAPE):
            return ListEvent(ListAction.QUIT)
        if char in ("i", "a"):
            return ListEvent(ListAction.ADD)
        if char == "s":
            self.cycle_sort()
            return IDLE

        if char == "j" or key.is_(KeyName.DOWN):
            self.move(1, count)
        elif char == "k" or key.is_(KeyName.UP):
            self.move(-1, count)
        elif char == "g" or key.is_(KeyName.HOME):
            self.jump_first()
        elif char == "G" or key.is_(KeyName.END):
            self.jump_last(count)

        if count == 0:
            return IDLE
        self.clamp(count)
        selected = notes[self.selected_index]

        if char in QUICK_PRIORITY_KEYS:
            return ListEvent(ListAction.SET_PRIORITY, selected.id, QUICK_PRIORITY_KEYS[char])
        if key.is_(KeyName.ENTER):
            return ListEvent(ListAction.VIEW, selected.id)
        if char == "e":
            return ListEvent(ListAction.EDIT, selected.id)
        if char == "d":
            return ListEvent(ListAction.DELETE, selected.id)
        if char == "x":
            return ListEvent(ListAction.TOGGLE_OBSCURED, selected.id)
        return IDLE
