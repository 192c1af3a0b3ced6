"""Read-only note inspection.

The viewer shows one stored note and lets the user walk its links. Two actions
write straight through to storage instead of waiting for an edit commit:
deleting a link and toggling the obscured flag. The viewer reports those as
``ViewAction.PERSIST`` with the note values to write; the controller performs
the write without running draft validation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .keys import KeyEvent, KeyName
from .models import Link, Note
from .session import EXTENDED, FieldLayout


class ViewAction(str, Enum):
    NONE = "none"
    OPEN_LINK = "open_link"
    PERSIST = "persist"
    EDIT = "edit"
    BACK = "back"


@dataclass(frozen=True)
class ViewEvent:
    action: ViewAction
    link: Link | None = None


NOTHING = ViewEvent(ViewAction.NONE)


class ViewModeController:
    """Link navigation plus auto-saved link deletion and obscured toggling."""

    def __init__(self, note: Note, layout: FieldLayout = EXTENDED):
        self.note = note
        self.layout = layout
        self.selected_link_index = 0

    @property
    def links(self) -> tuple[Link, ...]:
        return self.note.links

    @property
    def selected_link(self) -> Link | None:
        if not self.note.links:
            return None
        return self.note.links[self.selected_link_index]

    def replace_note(self, note: Note) -> None:
        """Adopt the stored copy after a write and keep the selection in range."""
        self.note = note
        self._clamp_selection()

    def delete_selected_link(self) -> None:
        if not self.note.links:
            return
        index = self.selected_link_index
        links = self.note.links[:index] + self.note.links[index + 1 :]
        self.note = replace(self.note, links=links)
        self._clamp_selection()

    def toggle_obscured(self) -> None:
        self.note = replace(self.note, obscured=not self.note.obscured)

    def handle_key(self, key: KeyEvent) -> ViewEvent:
        if key.is_(KeyName.ESCAPE) or key.printable == "q":
            return ViewEvent(ViewAction.BACK)
        if key.is_(KeyName.ENTER):
            return ViewEvent(ViewAction.EDIT)
        if key.printable == "x":
            if not self.layout.obscured:
                return NOTHING
            self.toggle_obscured()
            return ViewEvent(ViewAction.PERSIST)

        if not self.note.links:
            return NOTHING

        if key.printable == "o":
            return ViewEvent(ViewAction.OPEN_LINK, link=self.selected_link)
        if key.printable == "d" or key.is_(KeyName.DELETE):
            self.delete_selected_link()
            return ViewEvent(ViewAction.PERSIST)
        if key.is_(KeyName.UP) or key.printable == "k":
            self.selected_link_index = max(0, self.selected_link_index - 1)
        elif key.is_(KeyName.DOWN) or key.printable == "j":
            self.selected_link_index = min(len(self.note.links) - 1, self.selected_link_index + 1)
        return NOTHING

    def _clamp_selection(self) -> None:
        count = len(self.note.links)
        if count == 0:
            self.selected_link_index = 0
        elif self.selected_link_index >= count:
            self.selected_link_index = count - 1
