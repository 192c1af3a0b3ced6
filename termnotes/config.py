"""Application settings and logging setup.

Settings come from, lowest precedence first: built-in defaults, an optional
YAML file, the ``TERMNOTES_STORE`` environment variable, and CLI options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .session import LAYOUTS, FieldLayout, get_layout
from .storage import default_store_path

CONFIG_ENV_STORE = "TERMNOTES_STORE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_config_path() -> Path:
    return Path.home() / ".config" / "termnotes" / "config.yml"


def default_log_path() -> Path:
    return Path.home() / ".terminal_notes.log"


class ConfigError(Exception):
    """The settings file or a setting value is invalid."""


@dataclass
class AppConfig:
    store_path: Path = field(default_factory=default_store_path)
    layout: str = "extended"
    theme: str | None = None  # None: use the theme saved in the notes document
    log_file: Path = field(default_factory=default_log_path)
    log_level: str = "WARNING"

    @property
    def field_layout(self) -> FieldLayout:
        return get_layout(self.layout)

    def with_overrides(self, **overrides: Any) -> "AppConfig":
        """Copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _coerce_path(value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' must be a non-empty path string")
    return Path(value).expanduser()


def load_config(path: Path | None = None) -> AppConfig:
    """Load settings from YAML (if present) and the environment."""
    config = AppConfig()
    config_path = path or default_config_path()

    if config_path.exists():
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping of settings")

        if "store" in data:
            config.store_path = _coerce_path(data["store"], "store")
        if "log_file" in data:
            config.log_file = _coerce_path(data["log_file"], "log_file")
        if "layout" in data:
            config.layout = str(data["layout"]).strip().lower()
        if "theme" in data and data["theme"] is not None:
            config.theme = str(data["theme"]).strip()
        if "log_level" in data:
            config.log_level = str(data["log_level"]).strip().upper()
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")

    env_store = os.environ.get(CONFIG_ENV_STORE)
    if env_store:
        config.store_path = Path(env_store).expanduser()

    validate_config(config)
    return config


def validate_config(config: AppConfig) -> None:
    if config.layout not in LAYOUTS:
        raise ConfigError(f"Unknown layout '{config.layout}' (expected one of: {', '.join(LAYOUTS)})")
    if not isinstance(logging.getLevelName(config.log_level.upper()), int):
        raise ConfigError(f"Unknown log level '{config.log_level}'")


def configure_logging(log_file: Path, level: str = "WARNING") -> logging.Handler:
    """Send ``termnotes`` logs to a file; the TUI owns the terminal."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("termnotes")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler
