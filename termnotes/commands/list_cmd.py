"""List command - print the notes collection without starting the TUI."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from ..models import Note
from ..navigator import SortMode, sort_notes
from ..storage import NoteStore
from ..themes import priority_color, resolve_theme


def _note_payload(note: Note) -> dict:
    payload = note.to_dict()
    if note.obscured:
        payload["content"] = note.display_content
    return payload


def run_list(
    store: NoteStore,
    *,
    sort_mode: SortMode = SortMode.PRIORITY_ASC,
    output_json: bool = False,
    console: Console | None = None,
) -> int:
    """Print notes in ``sort_mode`` order. Returns the number of notes shown."""
    console = console or Console()
    notes = sort_notes(store.load_all(), sort_mode)

    if output_json:
        print(json.dumps([_note_payload(n) for n in notes], indent=2))
        return len(notes)

    if not notes:
        console.print("[dim]No notes yet.[/dim]")
        return 0

    theme = resolve_theme(store.load_themes(), store.load_config().get("theme"))
    table = Table(title=f"Notes ({len(notes)}) - sorted by {sort_mode.label}")
    table.add_column("Pri", justify="center")
    table.add_column("Title", style="bold")
    table.add_column("Content", overflow="fold")
    table.add_column("Links", justify="right")
    table.add_column("Created", no_wrap=True)

    for note in notes:
        table.add_row(
            f"[{priority_color(theme, note.priority)}]{note.priority.marker}[/]",
            note.title,
            note.display_content,
            str(len(note.links)) if note.links else "",
            note.created.astimezone().strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
    return len(notes)
