"""CLI entrypoint for termnotes."""

import sys
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config import AppConfig, ConfigError, configure_logging, load_config, validate_config
from .navigator import SORT_CYCLE, SortMode
from .session import LAYOUTS
from .storage import NoteStore, StoreError


def _fail(message: str) -> None:
    Console(stderr=True).print(f"Error: {message}", style="red", highlight=False)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="termnotes")
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Notes file (defaults to ~/.terminal_notes.json or $TERMNOTES_STORE)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (defaults to ~/.config/termnotes/config.yml)",
)
@click.option(
    "--layout",
    type=click.Choice(sorted(LAYOUTS)),
    default=None,
    help="Editor fields: minimal (title/content) or extended (title/priority/content, links)",
)
@click.option("--theme", type=str, default=None, help="Theme for this session (see `termnotes themes`)")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Log file (defaults to ~/.terminal_notes.log)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level",
)
@click.pass_context
def cli(
    ctx: click.Context,
    store_path: Path | None,
    config_path: Path | None,
    layout: str | None,
    theme: str | None,
    log_file: Path | None,
    log_level: str | None,
) -> None:
    """termnotes - keyboard-driven notes in your terminal.

    Run without a command to open the interactive list.
    """
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path).with_overrides(
            store_path=store_path,
            layout=layout,
            theme=theme,
            log_file=log_file,
            log_level=log_level.upper() if log_level else None,
        )
        validate_config(config)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e

    configure_logging(config.log_file, config.log_level)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        from .tui import run_tui

        try:
            run_tui(config)
        except StoreError as e:
            _fail(str(e))


def _store(ctx: click.Context) -> NoteStore:
    config: AppConfig = ctx.obj["config"]
    return NoteStore(config.store_path)


@cli.command("list")
@click.option(
    "--sort",
    "sort_mode",
    type=click.Choice([mode.value for mode in SORT_CYCLE]),
    default=SortMode.PRIORITY_ASC.value,
    show_default=True,
    help="Sort order",
)
@click.option("--json", "output_json", is_flag=True, help="Output notes as JSON")
@click.pass_context
def list_notes(ctx: click.Context, sort_mode: str, output_json: bool) -> None:
    """Print all notes without opening the interactive view."""
    from .commands.list_cmd import run_list

    try:
        run_list(_store(ctx), sort_mode=SortMode(sort_mode), output_json=output_json)
    except StoreError as e:
        _fail(str(e))


@cli.command()
@click.pass_context
def themes(ctx: click.Context) -> None:
    """List available themes; the active one is marked with *."""
    from .commands.theme_cmd import run_themes

    try:
        run_themes(_store(ctx))
    except StoreError as e:
        _fail(str(e))


@cli.command()
@click.argument("name")
@click.pass_context
def theme(ctx: click.Context, name: str) -> None:
    """Select the active theme.

    Examples:

        termnotes theme nord
    """
    from .commands.theme_cmd import run_set_theme

    try:
        ok = run_set_theme(_store(ctx), name)
    except StoreError as e:
        _fail(str(e))
    if not ok:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
