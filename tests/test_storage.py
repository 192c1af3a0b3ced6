import json
from pathlib import Path

import pytest

import termnotes.storage as storage_mod
from termnotes.models import Link, Priority
from termnotes.storage import NoteStore, StoreError, migrate_document
from termnotes.themes import DEFAULT_THEMES


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_missing_file_is_created_with_defaults(store: NoteStore, store_path: Path) -> None:
    assert store.load_all() == []

    doc = _read(store_path)
    assert doc["config"] == {"theme": "default"}
    assert set(doc["themes"]) == set(DEFAULT_THEMES)
    assert doc["notes"] == []


def test_create_trims_and_stamps(store: NoteStore, store_path: Path) -> None:
    result = store.create("  Groceries ", " Milk, eggs\n", Priority.HIGH)

    assert result
    note = result.note
    assert note.title == "Groceries"
    assert note.content == "Milk, eggs"
    assert note.priority is Priority.HIGH
    assert note.links == ()
    assert note.obscured is False
    assert note.created_at == note.updated_at

    raw = _read(store_path)["notes"][0]
    assert raw["id"] == note.id
    assert raw["createdAt"] == note.created_at
    assert raw["links"] == []


def test_create_assigns_unique_ids(store: NoteStore) -> None:
    ids = {store.create(f"t{i}", "c").note.id for i in range(5)}
    assert len(ids) == 5


def test_update_refreshes_updated_at_only(store: NoteStore, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(storage_mod, "utc_now_iso", lambda: "2024-01-01T00:00:00+00:00")
    note = store.create("Title", "Body", Priority.LOW, [Link("https://a.example", "A")]).note

    monkeypatch.setattr(storage_mod, "utc_now_iso", lambda: "2024-02-01T00:00:00+00:00")
    result = store.update(note.id, "New title", "New body")

    assert result
    updated = store.get_by_id(note.id)
    assert updated.title == "New title"
    assert updated.content == "New body"
    assert updated.created_at == "2024-01-01T00:00:00+00:00"
    assert updated.updated_at == "2024-02-01T00:00:00+00:00"
    # Optional fields left as None keep their stored values.
    assert updated.priority is Priority.LOW
    assert updated.links == (Link("https://a.example", "A"),)


def test_update_optional_fields(store: NoteStore) -> None:
    note = store.create("Title", "Body", links=[Link("https://a.example", "A")]).note
    store.update(note.id, note.title, note.content, Priority.MEDIUM, [], True)

    updated = store.get_by_id(note.id)
    assert updated.priority is Priority.MEDIUM
    assert updated.links == ()
    assert updated.obscured is True


def test_update_missing_note(store: NoteStore) -> None:
    result = store.update("nope", "t", "c")

    assert not result
    assert result.not_found
    assert "nope" in result.error


def test_delete(store: NoteStore) -> None:
    keep = store.create("keep", "c").note
    drop = store.create("drop", "c").note

    assert store.delete(drop.id)
    assert [n.id for n in store.load_all()] == [keep.id]


def test_delete_missing_leaves_collection_unchanged(store: NoteStore, store_path: Path) -> None:
    store.create("keep", "c")
    before = store_path.read_text(encoding="utf-8")

    result = store.delete("nope")

    assert not result
    assert result.not_found
    assert store_path.read_text(encoding="utf-8") == before


def test_legacy_array_is_migrated(store: NoteStore, store_path: Path) -> None:
    store_path.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "title": "Old",
                    "content": "note",
                    "priority": "urgent",
                    "createdAt": "2023-05-01T10:00:00.000Z",
                    "updatedAt": "2023-05-01T10:00:00.000Z",
                }
            ]
        ),
        encoding="utf-8",
    )

    notes = store.load_all()

    assert len(notes) == 1
    assert notes[0].links == ()
    assert notes[0].obscured is False
    assert notes[0].priority is Priority.NONE
    doc = _read(store_path)
    assert isinstance(doc, dict)
    assert doc["notes"][0]["obscured"] is False
    assert "default" in doc["themes"]


def test_missing_sections_are_added(store: NoteStore, store_path: Path) -> None:
    store_path.write_text(json.dumps({"notes": []}), encoding="utf-8")

    assert store.load_config() == {"theme": "default"}
    assert set(store.load_themes()) == set(DEFAULT_THEMES)


def test_migrate_document_reports_no_change_for_current_shape() -> None:
    doc = {"config": {"theme": "nord"}, "themes": {}, "notes": [{"id": "1", "links": [], "obscured": True}]}
    migrated, changed = migrate_document(doc)

    assert not changed
    assert migrated["config"] == {"theme": "nord"}


def test_corrupt_file_raises_and_is_not_overwritten(store: NoteStore, store_path: Path) -> None:
    store_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        store.load_all()
    assert store_path.read_text(encoding="utf-8") == "{not json"


def test_unexpected_top_level_type_raises(store: NoteStore, store_path: Path) -> None:
    store_path.write_text("42", encoding="utf-8")

    with pytest.raises(StoreError):
        store.load_all()


def test_malformed_entries_are_skipped(store: NoteStore, store_path: Path) -> None:
    store_path.write_text(
        json.dumps({"config": {}, "themes": {}, "notes": ["junk", {"title": "no id"}, {"id": 7, "title": "ok"}]}),
        encoding="utf-8",
    )

    notes = store.load_all()
    assert [n.id for n in notes] == ["7"]
    assert store.get_by_id("7").title == "ok"


def test_write_failure_is_reported(store: NoteStore, monkeypatch: pytest.MonkeyPatch) -> None:
    store.load_all()

    def fail(path, data):
        raise OSError("disk full")

    monkeypatch.setattr(storage_mod, "_atomic_write_json", fail)
    result = store.create("t", "c")

    assert not result
    assert not result.not_found
    assert "disk full" in result.error


def test_config_round_trip(store: NoteStore) -> None:
    assert store.save_config(theme="nord")
    assert store.load_config()["theme"] == "nord"

    assert set(store.load_themes()) == set(DEFAULT_THEMES)


def test_failed_write_leaves_no_temp_file(store: NoteStore, store_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store.create("keep", "c")
    before = store_path.read_text(encoding="utf-8")

    def fail(fd):
        raise OSError("fsync failed")

    monkeypatch.setattr(storage_mod.os, "fsync", fail)
    result = store.create("lost", "c")

    assert not result
    assert "fsync failed" in result.error
    assert store_path.read_text(encoding="utf-8") == before
    assert list(store_path.parent.glob("*.tmp")) == []
