"""Add-link sub-flow: a URL field followed by an optional title field."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlparse

from .keys import KeyEvent, KeyName
from .models import Link
from .text_buffer import TextBuffer

ALLOWED_SCHEMES = ("http", "https")
INVALID_URL_HINT = "Invalid URL - must start with http:// or https://"
URL_PROMPT_HINT = "Enter URL and press Enter"


def is_valid_url(value: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parsed = urlparse(candidate)
        # Accessing .port validates the authority part.
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.hostname)


class LinkField(str, Enum):
    URL = "url"
    TITLE = "title"


@dataclass
class LinkDraft:
    url: TextBuffer = field(default_factory=lambda: TextBuffer(multiline=False))
    title: TextBuffer = field(default_factory=lambda: TextBuffer(multiline=False))
    input_field: LinkField = LinkField.URL


class LinkEntryFlow:
    """Collects one link. ``handle_key`` returns the finished ``Link`` once."""

    def __init__(self) -> None:
        self.draft = LinkDraft()

    @property
    def input_field(self) -> LinkField:
        return self.draft.input_field

    @property
    def active_buffer(self) -> TextBuffer:
        return self.draft.url if self.draft.input_field is LinkField.URL else self.draft.title

    @property
    def url_hint(self) -> str:
        """Hint shown beside the URL field."""
        url = self.draft.url.text
        if url and not is_valid_url(url):
            return INVALID_URL_HINT
        return URL_PROMPT_HINT

    def reset(self) -> None:
        self.draft = LinkDraft()

    def submit(self) -> Link | None:
        """Enter on the active field."""
        url = self.draft.url.text
        if not is_valid_url(url):
            # Invalid URLs never advance; the buffer is kept for correction.
            return None
        if self.draft.input_field is LinkField.URL:
            self.draft.input_field = LinkField.TITLE
            return None
        clean_url = url.strip()
        link = Link(url=clean_url, title=self.draft.title.text.strip() or clean_url)
        self.reset()
        return link

    def handle_key(self, key: KeyEvent) -> Link | None:
        buffer = self.active_buffer
        if key.is_(KeyName.ENTER):
            return self.submit()
        if key.is_(KeyName.BACKSPACE):
            buffer.backspace()
        elif key.is_(KeyName.LEFT):
            buffer.move_left()
        elif key.is_(KeyName.RIGHT):
            buffer.move_right()
        elif key.is_(KeyName.HOME):
            buffer.move_home()
        elif key.is_(KeyName.END):
            buffer.move_end()
        elif key.printable:
            buffer.insert(key.printable)
        return None
