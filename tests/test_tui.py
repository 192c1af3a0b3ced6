import io
from pathlib import Path

from rich.console import Console

from termnotes.config import AppConfig
from termnotes.storage import NoteStore
from termnotes.tui import run_tui


def _config(tmp_path: Path) -> AppConfig:
    return AppConfig(store_path=tmp_path / "notes.json", log_file=tmp_path / "termnotes.log")


def _keys(*raw: str):
    pending = iter(raw)
    return lambda: next(pending)


def test_create_note_and_quit(tmp_path: Path) -> None:
    console = Console(file=io.StringIO(), width=100, height=30)
    keys = _keys("a", *"Todo", "\x1b[B", "\x1b[B", *"Ship it", "\x13", "q")

    run_tui(_config(tmp_path), console=console, read_key=keys)

    notes = NoteStore(tmp_path / "notes.json").load_all()
    assert [(n.title, n.content) for n in notes] == [("Todo", "Ship it")]


def test_interrupt_exits_cleanly(tmp_path: Path) -> None:
    console = Console(file=io.StringIO(), width=100, height=30)

    def interrupt() -> str:
        raise KeyboardInterrupt

    run_tui(_config(tmp_path), console=console, read_key=interrupt)

    assert NoteStore(tmp_path / "notes.json").load_all() == []
