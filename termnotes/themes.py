"""Color themes.

Themes are stored in the notes document so users can edit them by hand. The
tables below seed a new document and fill any keys a stored theme is missing.
"""

from __future__ import annotations

from typing import Any

from .models import Priority

DEFAULT_THEME_NAME = "default"

DEFAULT_THEMES: dict[str, dict[str, str]] = {
    "default": {
        "primary": "#6ee7b7",
        "secondary": "#c4b5fd",
        "danger": "#fb7185",
        "warning": "#fcd34d",
        "success": "#bef264",
        "info": "#93c5fd",
        "priorityNone": "#ffffff",
        "priorityLow": "#93c5fd",
        "priorityMedium": "#fef08a",
        "priorityHigh": "#f87171",
    },
    "dark": {
        "primary": "#10b981",
        "secondary": "#8b5cf6",
        "danger": "#ef4444",
        "warning": "#f59e0b",
        "success": "#84cc16",
        "info": "#3b82f6",
        "priorityNone": "#d1d5db",
        "priorityLow": "#60a5fa",
        "priorityMedium": "#fbbf24",
        "priorityHigh": "#f87171",
    },
    "nord": {
        "primary": "#88c0d0",
        "secondary": "#b48ead",
        "danger": "#bf616a",
        "warning": "#ebcb8b",
        "success": "#a3be8c",
        "info": "#81a1c1",
        "priorityNone": "#4c566a",
        "priorityLow": "#5e81ac",
        "priorityMedium": "#ebcb8b",
        "priorityHigh": "#bf616a",
    },
    "gruvbox": {
        "primary": "#83a598",
        "secondary": "#d3869b",
        "danger": "#fb4934",
        "warning": "#fabd2f",
        "success": "#b8bb26",
        "info": "#8ec07c",
        "priorityNone": "#a89984",
        "priorityLow": "#83a598",
        "priorityMedium": "#fabd2f",
        "priorityHigh": "#fb4934",
    },
    "dracula": {
        "primary": "#50fa7b",
        "secondary": "#bd93f9",
        "danger": "#ff5555",
        "warning": "#f1fa8c",
        "success": "#50fa7b",
        "info": "#8be9fd",
        "priorityNone": "#f8f8f2",
        "priorityLow": "#8be9fd",
        "priorityMedium": "#f1fa8c",
        "priorityHigh": "#ff5555",
    },
}

PRIORITY_COLOR_KEYS: dict[Priority, str] = {
    Priority.HIGH: "priorityHigh",
    Priority.MEDIUM: "priorityMedium",
    Priority.LOW: "priorityLow",
    Priority.NONE: "priorityNone",
}


def default_themes() -> dict[str, dict[str, str]]:
    """A fresh copy of the built-in tables."""
    return {name: dict(colors) for name, colors in DEFAULT_THEMES.items()}


def resolve_theme(themes: dict[str, Any], name: str | None) -> dict[str, str]:
    """Colors for ``name``; unknown names and missing keys fall back to the default theme."""
    base = dict(DEFAULT_THEMES[DEFAULT_THEME_NAME])
    chosen = themes.get(name or DEFAULT_THEME_NAME)
    if not isinstance(chosen, dict):
        chosen = themes.get(DEFAULT_THEME_NAME)
    if isinstance(chosen, dict):
        base.update({k: v for k, v in chosen.items() if isinstance(k, str) and isinstance(v, str)})
    return base


def priority_color(theme: dict[str, str], priority: Priority) -> str:
    return theme.get(PRIORITY_COLOR_KEYS[priority], theme["priorityNone"])
