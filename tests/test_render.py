import io

from rich.console import Console

from termnotes.app import AppController
from termnotes.keys import KeyName
from termnotes.models import OBSCURED_PLACEHOLDER, Link
from termnotes.render import (
    DELETE_PROMPT,
    EMPTY_MESSAGE,
    content_width,
    render,
    truncate,
)
from termnotes.storage import NoteStore
from termnotes.themes import default_themes, resolve_theme

THEME = resolve_theme(default_themes(), "default")


def _screen(controller: AppController, width: int = 120, height: int = 30) -> str:
    console = Console(record=True, width=width, file=io.StringIO(), color_system=None)
    console.print(render(controller.state, THEME, width, height))
    return console.export_text()


def test_truncate() -> None:
    assert truncate("abcdef", 3) == "abc..."
    assert truncate("abc", 3) == "abc"


def test_content_width_has_a_floor() -> None:
    assert content_width(50) == 10
    assert content_width(100) == 40


def test_empty_list_screen(controller: AppController) -> None:
    screen = _screen(controller)
    assert "Terminal Notes" in screen
    assert EMPTY_MESSAGE in screen


def test_list_screen_shows_notes_and_hides_obscured(controller: AppController, store: NoteStore) -> None:
    store.create("Groceries", "Milk, eggs")
    store.create("Passwords", "hunter2", obscured=True)
    controller.refresh()

    screen = _screen(controller)

    assert "Terminal Notes (2)" in screen
    assert "Groceries - Milk, eggs" in screen
    assert OBSCURED_PLACEHOLDER in screen
    assert "hunter2" not in screen
    assert "Priority ↑" in screen


def test_list_header_shows_position_when_scrolling(controller: AppController, store: NoteStore) -> None:
    for i in range(12):
        store.create(f"Note {i}", "Body")
    controller.refresh()

    screen = _screen(controller, height=10)

    assert "[1/12]" in screen
    assert "Note 0" in screen
    assert "Note 11" not in screen


def test_editor_screen(controller: AppController, press) -> None:
    press(controller, "a", "Groceries")
    screen = _screen(controller)

    assert "Groceries" in screen
    assert "Priority:" in screen
    assert "Ctrl+S=save" in screen


def test_link_entry_hint(controller: AppController, press) -> None:
    press(controller, "a", "ctrl+l", "nope")
    screen = _screen(controller)

    assert "Add Link" in screen
    assert "Invalid URL" in screen


def test_viewer_screen(controller: AppController, store: NoteStore, press) -> None:
    store.create("Reading", "Articles", links=[Link("https://a.example", "Example A")])
    controller.refresh()
    press(controller, KeyName.ENTER)

    screen = _screen(controller)

    assert "Reading" in screen
    assert "Example A" in screen
    assert "https://a.example" in screen
    assert "Created:" in screen


def test_delete_screen(controller: AppController, store: NoteStore, press) -> None:
    store.create("Doomed", "Body")
    controller.refresh()
    press(controller, "d")

    screen = _screen(controller)

    assert "Doomed" in screen
    assert DELETE_PROMPT in screen


def test_empty_focused_fields_show_placeholders(controller: AppController, press) -> None:
    press(controller, "a")
    assert "Enter note title..." in _screen(controller)

    press(controller, KeyName.DOWN, KeyName.DOWN)
    assert "Enter note content..." in _screen(controller)

    press(controller, "ctrl+l")
    assert "https://example.com" in _screen(controller)

    press(controller, "https://a.example", KeyName.ENTER)
    assert "Optional title" in _screen(controller)


def test_placeholder_disappears_once_typed(controller: AppController, press) -> None:
    press(controller, "a", "T")
    assert "Enter note title..." not in _screen(controller)


def test_content_cursor_position(controller: AppController, press) -> None:
    press(controller, "a", KeyName.DOWN, KeyName.DOWN, "one", KeyName.ENTER, "two", KeyName.LEFT)
    assert "Ln 2/2, Col 3" in _screen(controller)
