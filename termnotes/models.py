"""Data models for stored notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Priority(str, Enum):
    """Note priority, in cycle order."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "Priority":
        """Read a stored priority; missing or unknown values mean none."""
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]

    @property
    def marker(self) -> str:
        """Single-character marker used in the list view."""
        return PRIORITY_MARKERS[self]

    def next(self) -> "Priority":
        index = PRIORITY_CYCLE.index(self)
        return PRIORITY_CYCLE[(index + 1) % len(PRIORITY_CYCLE)]

    def previous(self) -> "Priority":
        index = PRIORITY_CYCLE.index(self)
        return PRIORITY_CYCLE[(index - 1) % len(PRIORITY_CYCLE)]


PRIORITY_CYCLE: tuple[Priority, ...] = (
    Priority.HIGH,
    Priority.MEDIUM,
    Priority.LOW,
    Priority.NONE,
)

PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
    Priority.NONE: 4,
}

PRIORITY_MARKERS: dict[Priority, str] = {
    Priority.HIGH: "1",
    Priority.MEDIUM: "2",
    Priority.LOW: "3",
    Priority.NONE: "-",
}

OBSCURED_PLACEHOLDER = "<obscured>"

# Stand-in for unreadable timestamps so they sort first.
EPOCH = datetime.fromtimestamp(0, timezone.utc)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Link:
    """A hyperlink attached to a note."""

    url: str
    title: str

    @property
    def has_distinct_title(self) -> bool:
        return bool(self.title) and self.title != self.url

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        url = str(data.get("url", ""))
        return cls(url=url, title=str(data.get("title") or url))


@dataclass(frozen=True)
class Note:
    """A stored note. Instances are snapshots; storage hands out fresh ones on every load."""

    id: str
    title: str
    content: str
    created_at: str
    updated_at: str
    priority: Priority = Priority.NONE
    links: tuple[Link, ...] = field(default_factory=tuple)
    obscured: bool = False

    @property
    def created(self) -> datetime:
        return parse_timestamp(self.created_at)

    @property
    def updated(self) -> datetime:
        return parse_timestamp(self.updated_at)

    @property
    def display_content(self) -> str:
        """Content as read views show it."""
        return OBSCURED_PLACEHOLDER if self.obscured else self.content

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "priority": self.priority.value,
            "links": [link.to_dict() for link in self.links],
            "obscured": self.obscured,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        """Create from a stored JSON object."""
        raw_links = data.get("links")
        links = tuple(
            Link.from_dict(item) for item in (raw_links if isinstance(raw_links, list) else []) if isinstance(item, dict)
        )
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", data.get("createdAt", ""))),
            priority=Priority.parse(data.get("priority")),
            links=links,
            obscured=bool(data.get("obscured", False)),
        )
