"""JSON document store for notes, app config and themes.

The whole collection lives in one JSON document (``~/.terminal_notes.json`` by
default). Every mutation reads the document, changes it and rewrites it
atomically, so a crash mid-write leaves the last complete version on disk.

Mutations return a ``StoreResult`` instead of raising: a missing id or a failed
write is reported to the caller, which decides how to surface it. Only an
unreadable document raises ``StoreError``, since nothing sensible can continue
from it.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from .models import Link, Note, Priority, utc_now_iso
from .themes import DEFAULT_THEME_NAME, default_themes

logger = logging.getLogger(__name__)

NOTES_FILE = ".terminal_notes.json"


def default_store_path() -> Path:
    return Path.home() / NOTES_FILE


class StoreError(Exception):
    """The notes document cannot be read."""


@dataclass
class StoreResult:
    """Outcome of a mutating store call. Truthy on success."""

    success: bool = True
    note: Note | None = None
    error: str | None = None
    not_found: bool = False

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def missing(cls, note_id: str) -> "StoreResult":
        return cls(success=False, error=f"Note {note_id} not found", not_found=True)


def _default_document() -> dict[str, Any]:
    return {
        "config": {"theme": DEFAULT_THEME_NAME},
        "themes": default_themes(),
        "notes": [],
    }


def _atomic_write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def migrate_document(data: Any) -> tuple[dict[str, Any], bool]:
    """Bring a loaded document up to the current shape.

    Returns the document and whether anything changed.
    """
    if isinstance(data, list):
        # Legacy format: the file was just the notes array.
        document = _default_document()
        document["notes"] = data
        data, changed = document, True
    elif isinstance(data, dict):
        changed = False
    else:
        raise StoreError(f"Unexpected top-level JSON type: {type(data).__name__}")

    if not isinstance(data.get("config"), dict):
        data["config"] = {"theme": DEFAULT_THEME_NAME}
        changed = True
    if not isinstance(data.get("themes"), dict):
        data["themes"] = default_themes()
        changed = True
    if not isinstance(data.get("notes"), list):
        data["notes"] = []
        changed = True

    for raw in data["notes"]:
        if not isinstance(raw, dict):
            continue
        if not isinstance(raw.get("links"), list):
            raw["links"] = []
            changed = True
        if "obscured" not in raw:
            raw["obscured"] = False
            changed = True

    return data, changed


class NoteStore:
    """Read and write the notes document at ``path``."""

    def __init__(self, path: Path | None = None):
        self.path = path or default_store_path()

    # -- document I/O ------------------------------------------------------

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            document = _default_document()
            self._write_document(document)
            return document

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreError(f"{self.path} is not valid JSON: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read {self.path}: {e}") from e

        document, changed = migrate_document(raw)
        if changed:
            logger.info("Migrated notes document %s", self.path)
            self._write_document(document)
        return document

    def _write_document(self, document: dict[str, Any]) -> str | None:
        """Write the document; returns an error message instead of raising."""
        try:
            _atomic_write_json(self.path, document)
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            return f"Could not save notes: {e}"
        return None

    # -- notes -------------------------------------------------------------

    def load_all(self) -> list[Note]:
        """All notes in stored order."""
        notes: list[Note] = []
        for raw in self._read_document()["notes"]:
            if not isinstance(raw, dict) or "id" not in raw:
                logger.warning("Skipping malformed note entry in %s", self.path)
                continue
            notes.append(Note.from_dict(raw))
        return notes

    def get_by_id(self, note_id: str) -> Note | None:
        for note in self.load_all():
            if note.id == note_id:
                return note
        return None

    def create(
        self,
        title: str,
        content: str,
        priority: Priority | str = Priority.NONE,
        links: Iterable[Link] = (),
        obscured: bool = False,
    ) -> StoreResult:
        document = self._read_document()
        existing = {str(raw.get("id")) for raw in document["notes"] if isinstance(raw, dict)}
        note_id = str(uuid.uuid4())
        while note_id in existing:
            note_id = str(uuid.uuid4())

        now = utc_now_iso()
        note = Note(
            id=note_id,
            title=title.strip(),
            content=content.strip(),
            created_at=now,
            updated_at=now,
            priority=Priority.parse(priority),
            links=tuple(links),
            obscured=obscured,
        )
        document["notes"].append(note.to_dict())

        error = self._write_document(document)
        if error:
            return StoreResult(success=False, note=note, error=error)
        logger.info("Created note %s", note.id)
        return StoreResult(note=note)

    def update(
        self,
        note_id: str,
        title: str,
        content: str,
        priority: Priority | str | None = None,
        links: Iterable[Link] | None = None,
        obscured: bool | None = None,
    ) -> StoreResult:
        """Update a note; ``None`` leaves the optional fields unchanged."""
        document = self._read_document()
        raw = self._find_raw(document, note_id)
        if raw is None:
            return StoreResult.missing(note_id)

        raw["title"] = title.strip()
        raw["content"] = content.strip()
        raw["updatedAt"] = utc_now_iso()
        if priority is not None:
            raw["priority"] = Priority.parse(priority).value
        if links is not None:
            raw["links"] = [link.to_dict() for link in links]
        if obscured is not None:
            raw["obscured"] = obscured

        note = Note.from_dict(raw)
        error = self._write_document(document)
        if error:
            return StoreResult(success=False, note=note, error=error)
        logger.info("Updated note %s", note_id)
        return StoreResult(note=note)

    def delete(self, note_id: str) -> StoreResult:
        document = self._read_document()
        kept = [raw for raw in document["notes"] if not (isinstance(raw, dict) and str(raw.get("id")) == note_id)]
        if len(kept) == len(document["notes"]):
            return StoreResult.missing(note_id)

        document["notes"] = kept
        error = self._write_document(document)
        if error:
            return StoreResult(success=False, error=error)
        logger.info("Deleted note %s", note_id)
        return StoreResult()

    @staticmethod
    def _find_raw(document: dict[str, Any], note_id: str) -> dict[str, Any] | None:
        for raw in document["notes"]:
            if isinstance(raw, dict) and str(raw.get("id")) == note_id:
                return raw
        return None

    # -- config and themes -------------------------------------------------

    def load_config(self) -> dict[str, Any]:
        return dict(self._read_document()["config"])

    def save_config(self, **values: Any) -> StoreResult:
        document = self._read_document()
        document["config"].update(values)
        error = self._write_document(document)
        return StoreResult(success=error is None, error=error)

    def load_themes(self) -> dict[str, Any]:
        return self._read_document()["themes"]
