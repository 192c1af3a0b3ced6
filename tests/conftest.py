"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from termnotes.app import AppController
from termnotes.keys import KeyEvent, KeyName
from termnotes.storage import NoteStore


class FakeEnvironment:
    """Records opened URLs and reports a fixed terminal size."""

    def __init__(self, width: int = 100, height: int = 30):
        self.width = width
        self.height = height
        self.opened: list[str] = []

    def open_external_url(self, url: str) -> None:
        self.opened.append(url)

    def screen_dimensions(self) -> tuple[int, int]:
        return self.width, self.height


def as_key(item) -> KeyEvent:
    """Build a key from a KeyEvent, a KeyName, "ctrl+<letter>" or a single character."""
    if isinstance(item, KeyEvent):
        return item
    if isinstance(item, KeyName):
        return KeyEvent.named(item)
    if item.startswith("ctrl+"):
        return KeyEvent.control(item[len("ctrl+") :])
    return KeyEvent.text(item)


@pytest.fixture
def press():
    """Feed keys to anything with a ``handle_key`` method; returns the last result.

    Plain strings longer than one character are typed one character at a time.
    """

    def _press(target, *items):
        result = None
        for item in items:
            typed = isinstance(item, str) and not isinstance(item, KeyName)
            if typed and len(item) > 1 and not item.startswith("ctrl+"):
                for ch in item:
                    result = target.handle_key(KeyEvent.text(ch))
            else:
                result = target.handle_key(as_key(item))
        return result

    return _press


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "notes.json"


@pytest.fixture
def store(store_path: Path) -> NoteStore:
    return NoteStore(store_path)


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def controller(store: NoteStore, environment: FakeEnvironment) -> AppController:
    return AppController(store, environment)
