"""Theme commands - list available themes and select the active one."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..storage import NoteStore
from ..themes import DEFAULT_THEME_NAME, resolve_theme

SWATCH_KEYS = ("primary", "secondary", "danger", "warning", "success", "info")


def run_themes(store: NoteStore, *, console: Console | None = None) -> list[str]:
    """Print stored themes with color swatches; returns the theme names."""
    console = console or Console()
    themes = store.load_themes()
    active = store.load_config().get("theme", DEFAULT_THEME_NAME)

    table = Table(title="Themes")
    table.add_column("", width=1)
    table.add_column("Name", style="bold")
    table.add_column("Colors")

    names = sorted(themes)
    for name in names:
        colors = resolve_theme(themes, name)
        swatch = Text()
        for key in SWATCH_KEYS:
            swatch.append("■ ", style=colors[key])
        table.add_row("*" if name == active else "", name, swatch)

    console.print(table)
    return names


def run_set_theme(store: NoteStore, name: str, *, console: Console | None = None) -> bool:
    """Make ``name`` the active theme. Returns False if it does not exist or was not saved."""
    console = console or Console(stderr=True)
    themes = store.load_themes()
    if name not in themes:
        console.print(f"[red]Unknown theme: {name}[/red] (available: {', '.join(sorted(themes))})")
        return False

    result = store.save_config(theme=name)
    if not result:
        console.print(f"[red]{result.error}[/red]")
        return False
    console.print(f"Theme set to [bold]{name}[/bold]")
    return True
