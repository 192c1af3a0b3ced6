"""Process-environment collaborators: browser launching and terminal size."""

from __future__ import annotations

import logging

import click
from rich.console import Console

logger = logging.getLogger(__name__)


class Environment:
    """Real terminal environment. Tests substitute an object with the same two methods."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def open_external_url(self, url: str) -> None:
        """Open ``url`` in the default browser; failures are logged, not raised."""
        try:
            click.launch(url)
        except OSError as e:
            logger.warning("Could not open %s: %s", url, e)

    def screen_dimensions(self) -> tuple[int, int]:
        """Current (width, height); polled on every render."""
        size = self.console.size
        return size.width, size.height
