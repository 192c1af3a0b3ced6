"""Note editing session.

A session owns an ``EditDraft``: private buffers seeded from a stored note (or
blank for a new one). Nothing reaches storage until the caller acts on a
``SessionResult.SAVE``; cancelling simply drops the session object.

Which fields exist, their order, and which extra actions are enabled comes from
a ``FieldLayout``. The two shipped layouts are ``minimal`` (title and content)
and ``extended`` (title, priority and content, with priority cycling, links and
the obscured toggle).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .keys import KeyEvent, KeyName
from .links import LinkEntryFlow
from .models import Link, Note, Priority
from .text_buffer import TextBuffer


class Focus(str, Enum):
    TITLE = "title"
    PRIORITY = "priority"
    CONTENT = "content"


@dataclass(frozen=True)
class FieldLayout:
    """Field order plus the optional actions a session supports."""

    name: str
    fields: tuple[Focus, ...]
    priority_cycle: bool = False
    links: bool = False
    obscured: bool = False

    def next_field(self, focus: Focus) -> Focus:
        index = self.fields.index(focus)
        return self.fields[min(index + 1, len(self.fields) - 1)]

    def previous_field(self, focus: Focus) -> Focus:
        index = self.fields.index(focus)
        return self.fields[max(index - 1, 0)]


MINIMAL = FieldLayout(name="minimal", fields=(Focus.TITLE, Focus.CONTENT))
EXTENDED = FieldLayout(
    name="extended",
    fields=(Focus.TITLE, Focus.PRIORITY, Focus.CONTENT),
    priority_cycle=True,
    links=True,
    obscured=True,
)

LAYOUTS: dict[str, FieldLayout] = {layout.name: layout for layout in (MINIMAL, EXTENDED)}


def get_layout(name: str) -> FieldLayout:
    try:
        return LAYOUTS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown layout '{name}' (expected one of: {', '.join(LAYOUTS)})") from None


@dataclass
class EditDraft:
    """Mutable shadow copy of a note's editable fields."""

    title: TextBuffer = field(default_factory=lambda: TextBuffer(multiline=False))
    content: TextBuffer = field(default_factory=TextBuffer)
    priority: Priority = Priority.NONE
    links: list[Link] = field(default_factory=list)
    obscured: bool = False

    @classmethod
    def from_note(cls, note: Note | None) -> "EditDraft":
        if note is None:
            return cls()
        return cls(
            title=TextBuffer.from_text(note.title, multiline=False),
            content=TextBuffer.from_text(note.content),
            priority=note.priority,
            links=list(note.links),
            obscured=note.obscured,
        )

    def is_savable(self) -> bool:
        return bool(self.title.text.strip()) and bool(self.content.text.strip())


@dataclass(frozen=True)
class Commit:
    """Values to write; ``note_id`` is None for a new note."""

    note_id: str | None
    title: str
    content: str
    priority: Priority
    links: tuple[Link, ...]
    obscured: bool


class SessionResult(str, Enum):
    CONTINUE = "continue"
    SAVE = "save"
    CANCEL = "cancel"


class NoteEditSession:
    """Keyboard-driven editing of one draft."""

    def __init__(self, note: Note | None = None, layout: FieldLayout = EXTENDED):
        self.note_id = note.id if note is not None else None
        self.layout = layout
        self.draft = EditDraft.from_note(note)
        self.focus = layout.fields[0]
        self.link_flow: LinkEntryFlow | None = None

    @property
    def is_new(self) -> bool:
        return self.note_id is None

    @property
    def adding_link(self) -> bool:
        return self.link_flow is not None

    def commit(self) -> Commit:
        return Commit(
            note_id=self.note_id,
            title=self.draft.title.text,
            content=self.draft.content.text,
            priority=self.draft.priority,
            links=tuple(self.draft.links),
            obscured=self.draft.obscured,
        )

    # -- actions -----------------------------------------------------------

    def cycle_priority(self) -> None:
        self.draft.priority = self.draft.priority.next()

    def toggle_obscured(self) -> None:
        self.draft.obscured = not self.draft.obscured

    def start_link(self) -> None:
        self.link_flow = LinkEntryFlow()

    def cancel_link(self) -> None:
        self.link_flow = None

    # -- dispatch ----------------------------------------------------------

    def handle_key(self, key: KeyEvent) -> SessionResult:
        if key.is_(KeyName.ESCAPE):
            if self.link_flow is not None:
                self.cancel_link()
                return SessionResult.CONTINUE
            return SessionResult.CANCEL

        if self.link_flow is not None:
            link = self.link_flow.handle_key(key)
            if link is not None:
                self.draft.links.append(link)
                self.link_flow = None
            return SessionResult.CONTINUE

        if key.is_ctrl("s"):
            # Incomplete drafts swallow the key without feedback.
            return SessionResult.SAVE if self.draft.is_savable() else SessionResult.CONTINUE

        if key.is_ctrl("l") and self.layout.links:
            self.start_link()
        elif key.is_(KeyName.TAB) and self.layout.priority_cycle:
            self.cycle_priority()
        elif key.is_ctrl("x") and self.layout.obscured:
            self.toggle_obscured()
        elif self.focus is Focus.TITLE:
            self._title_key(key)
        elif self.focus is Focus.PRIORITY:
            self._priority_key(key)
        else:
            self._content_key(key)
        return SessionResult.CONTINUE

    def _title_key(self, key: KeyEvent) -> None:
        if key.is_(KeyName.DOWN) or key.is_(KeyName.ENTER):
            self.focus = self.layout.next_field(Focus.TITLE)
        elif not _edit_line(self.draft.title, key):
            self.draft.title.insert(key.printable)

    def _priority_key(self, key: KeyEvent) -> None:
        if key.is_(KeyName.LEFT) or (key.char == "h" and not key.ctrl):
            self.draft.priority = self.draft.priority.previous()
        elif key.is_(KeyName.RIGHT) or (key.char == "l" and not key.ctrl):
            self.draft.priority = self.draft.priority.next()
        elif key.is_(KeyName.UP):
            self.focus = self.layout.previous_field(Focus.PRIORITY)
        elif key.is_(KeyName.DOWN) or key.is_(KeyName.ENTER):
            self.focus = self.layout.next_field(Focus.PRIORITY)
        elif key.char == "x" and not key.ctrl and self.layout.obscured:
            self.toggle_obscured()

    def _content_key(self, key: KeyEvent) -> None:
        buffer = self.draft.content
        if key.is_(KeyName.UP):
            if buffer.on_first_line:
                self.focus = self.layout.previous_field(Focus.CONTENT)
            else:
                buffer.move_up()
        elif key.is_(KeyName.DOWN):
            buffer.move_down()
        elif key.is_(KeyName.ENTER):
            buffer.insert_newline()
        elif not _edit_line(buffer, key):
            buffer.insert(key.printable)


def _edit_line(buffer: TextBuffer, key: KeyEvent) -> bool:
    """Apply horizontal editing keys; False if the key was not one of them."""
    if key.is_(KeyName.BACKSPACE):
        buffer.backspace()
    elif key.is_(KeyName.LEFT):
        buffer.move_left()
    elif key.is_(KeyName.RIGHT):
        buffer.move_right()
    elif key.is_(KeyName.HOME):
        buffer.move_home()
    elif key.is_(KeyName.END):
        buffer.move_end()
    else:
        return False
    return True
