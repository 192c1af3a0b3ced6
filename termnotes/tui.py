"""Full-screen terminal loop."""

from __future__ import annotations

import logging
from typing import Callable

import click
from rich.console import Console
from rich.live import Live

from .app import AppController
from .config import AppConfig
from .environment import Environment
from .keys import decode_key
from .render import render
from .storage import NoteStore
from .themes import resolve_theme

logger = logging.getLogger(__name__)


def run_tui(
    config: AppConfig,
    *,
    console: Console | None = None,
    read_key: Callable[[], str] = click.getchar,
) -> None:
    """Run the interactive app until the user quits from the list."""
    console = console or Console()
    store = NoteStore(config.store_path)
    environment = Environment(console)
    controller = AppController(store, environment, config.field_layout)

    theme_name = config.theme or store.load_config().get("theme")
    theme = resolve_theme(store.load_themes(), theme_name)
    logger.info("Starting with store %s, layout %s, theme %s", store.path, config.layout, theme_name)

    def frame():
        width, height = environment.screen_dimensions()
        return render(controller.state, theme, width, height)

    with Live(frame(), console=console, screen=True, auto_refresh=False) as live:
        while controller.state.running:
            try:
                raw = read_key()
            except (KeyboardInterrupt, EOFError):
                break
            controller.handle_key(decode_key(raw))
            live.update(frame(), refresh=True)
