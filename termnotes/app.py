"""Top-level mode dispatch.

``AppController`` owns an explicit ``AppState`` and routes each key to whichever
component owns the current mode:

- ``LIST``: the ``ListNavigator``;
- ``EDIT``: a ``ViewModeController`` (read-only sub-state) or a
  ``NoteEditSession``, never both;
- ``DELETE_CONFIRM``: the confirmation prompt.

Every storage mutation is followed by a full reload of the collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .keys import KeyEvent, KeyName
from .models import Note, Priority
from .navigator import ListAction, ListNavigator, sort_notes
from .session import EXTENDED, FieldLayout, NoteEditSession, SessionResult
from .storage import NoteStore, StoreResult
from .viewer import ViewAction, ViewModeController

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Note no longer exists"


class EnvironmentLike(Protocol):
    def open_external_url(self, url: str) -> None: ...

    def screen_dimensions(self) -> tuple[int, int]: ...


class Mode(str, Enum):
    LIST = "list"
    EDIT = "edit"
    DELETE_CONFIRM = "delete-confirm"


class ModeError(RuntimeError):
    """An action was attempted outside the mode that owns it."""


@dataclass
class AppState:
    mode: Mode = Mode.LIST
    notes: list[Note] = field(default_factory=list)
    navigator: ListNavigator = field(default_factory=ListNavigator)
    session: NoteEditSession | None = None
    viewer: ViewModeController | None = None
    pending_delete: Note | None = None
    status: str | None = None
    running: bool = True

    @property
    def sorted_notes(self) -> list[Note]:
        return sort_notes(self.notes, self.navigator.sort_mode)


class AppController:
    def __init__(self, store: NoteStore, environment: EnvironmentLike, layout: FieldLayout = EXTENDED):
        self.store = store
        self.environment = environment
        self.layout = layout
        self.state = AppState()
        self.refresh()

    # -- helpers -----------------------------------------------------------

    def refresh(self) -> None:
        self.state.notes = self.store.load_all()
        self.state.navigator.clamp(len(self.state.notes))

    def _enter(self, mode: Mode) -> None:
        """Switch mode, dropping whatever the previous mode owned."""
        self.state.mode = mode
        self.state.session = None
        self.state.viewer = None
        self.state.pending_delete = None

    def _require_mode(self, mode: Mode) -> None:
        if self.state.mode is not mode:
            raise ModeError(f"{mode.value} action attempted in {self.state.mode.value} mode")

    def _report(self, result: StoreResult, action: str) -> None:
        if result:
            return
        if result.not_found:
            logger.warning("%s: %s", action, result.error)
            self.state.status = NOT_FOUND_MESSAGE
        else:
            logger.error("%s failed: %s", action, result.error)
            self.state.status = result.error

    def _find(self, note_id: str | None) -> Note | None:
        return next((note for note in self.state.notes if note.id == note_id), None)

    # -- dispatch ----------------------------------------------------------

    def handle_key(self, key: KeyEvent) -> AppState:
        self.state.status = None
        if self.state.mode is Mode.LIST:
            self._list_key(key)
        elif self.state.mode is Mode.DELETE_CONFIRM:
            self._delete_key(key)
        elif self.state.viewer is not None:
            self._viewer_key(key)
        else:
            self._session_key(key)
        return self.state

    # -- list mode ---------------------------------------------------------

    def _list_key(self, key: KeyEvent) -> None:
        event = self.state.navigator.handle_key(key, self.state.sorted_notes)
        action = event.action

        if action is ListAction.QUIT:
            self.state.running = False
        elif action is ListAction.ADD:
            self.open_editor(None)
        elif action is ListAction.VIEW:
            self.open_viewer(event.note_id)
        elif action is ListAction.EDIT:
            self.open_editor(self._find(event.note_id))
        elif action is ListAction.DELETE:
            self.request_delete(event.note_id)
        elif action is ListAction.SET_PRIORITY and event.priority is not None:
            self.set_priority(event.note_id, event.priority)
        elif action is ListAction.TOGGLE_OBSCURED:
            self.toggle_obscured(event.note_id)

    def open_editor(self, note: Note | None) -> None:
        self._enter(Mode.EDIT)
        self.state.session = NoteEditSession(note, self.layout)

    def open_viewer(self, note_id: str | None) -> None:
        note = self._find(note_id)
        if note is None:
            return
        self._enter(Mode.EDIT)
        self.state.viewer = ViewModeController(note, self.layout)

    def request_delete(self, note_id: str | None) -> None:
        note = self._find(note_id)
        if note is None:
            return
        self._enter(Mode.DELETE_CONFIRM)
        self.state.pending_delete = note

    def set_priority(self, note_id: str | None, priority: Priority) -> None:
        self._require_mode(Mode.LIST)
        note = self._find(note_id)
        if note is None:
            return
        result = self.store.update(note.id, note.title, note.content, priority, note.links, note.obscured)
        self._report(result, "Set priority")
        self.refresh()

    def toggle_obscured(self, note_id: str | None) -> None:
        self._require_mode(Mode.LIST)
        note = self._find(note_id)
        if note is None:
            return
        result = self.store.update(note.id, note.title, note.content, note.priority, note.links, not note.obscured)
        self._report(result, "Toggle obscured")
        self.refresh()

    # -- delete confirmation ----------------------------------------------

    def _delete_key(self, key: KeyEvent) -> None:
        pending = self.state.pending_delete
        if key.printable == "d":
            if pending is not None:
                self._report(self.store.delete(pending.id), "Delete")
                self.refresh()
            self._enter(Mode.LIST)
        elif key.printable in ("n", "q") or key.is_(KeyName.ESCAPE):
            self._enter(Mode.LIST)

    # -- edit mode: viewer sub-state ---------------------------------------

    def _viewer_key(self, key: KeyEvent) -> None:
        viewer = self.state.viewer
        event = viewer.handle_key(key)

        if event.action is ViewAction.BACK:
            self._enter(Mode.LIST)
        elif event.action is ViewAction.EDIT:
            note = viewer.note
            self._enter(Mode.EDIT)
            self.state.session = NoteEditSession(note, self.layout)
        elif event.action is ViewAction.OPEN_LINK and event.link is not None:
            self.environment.open_external_url(event.link.url)
        elif event.action is ViewAction.PERSIST:
            self._auto_save(viewer)

    def _auto_save(self, viewer: ViewModeController) -> None:
        """Write the viewer's note immediately, bypassing draft validation."""
        if self.state.viewer is not viewer:
            raise ModeError("auto-save attempted without an active viewer")
        note = viewer.note
        result = self.store.update(note.id, note.title, note.content, note.priority, note.links, note.obscured)
        self._report(result, "Auto-save")
        if result and result.note is not None:
            viewer.replace_note(result.note)
        self.refresh()

    # -- edit mode: session sub-state --------------------------------------

    def _session_key(self, key: KeyEvent) -> None:
        session = self.state.session
        outcome = session.handle_key(key)

        if outcome is SessionResult.CANCEL:
            self._enter(Mode.LIST)
        elif outcome is SessionResult.SAVE:
            self.commit(session)

    def commit(self, session: NoteEditSession) -> None:
        values = session.commit()
        if values.note_id is None:
            result = self.store.create(values.title, values.content, values.priority, values.links, values.obscured)
            self._report(result, "Create")
        else:
            result = self.store.update(
                values.note_id, values.title, values.content, values.priority, values.links, values.obscured
            )
            self._report(result, "Update")
        self.refresh()
        self._enter(Mode.LIST)
