"""Tests for the ready-made records."""

import json as _json
import logging as _logging
import pathlib as _pathlib

import pytest as _pytest

import fieldsettings.records as records


@_pytest.fixture
def record_file(tmp_path: _pathlib.Path) -> _pathlib.Path:
    return tmp_path / "user.json"


class TestMemoryRecord:
    """Tests for MemoryRecord."""

    def test_starts_clean(self) -> None:
        rec = records.MemoryRecord({"settings": '{"a": 1}'})

        assert rec.dirty is False
        assert rec.settings().get("a") == 1

    def test_unsaved_write_is_dirty(self) -> None:
        rec = records.MemoryRecord(persist=False)

        rec.settings().set("a", 1)

        assert rec.dirty is True
        assert rec.save_count == 0

        rec.save()

        assert rec.dirty is False
        assert rec.saved_values == {"settings": '{"a": 1}'}

    def test_instance_overrides_class_defaults(self) -> None:
        rec = records.MemoryRecord(field_names=["prefs"], defaults={"x": 1})

        assert rec.settings_field_names == ("prefs",)
        assert rec.settings().get("x") == 1
        assert records.MemoryRecord().settings_field_names == ("settings",)


class TestJsonFileRecord:
    """Tests for JsonFileRecord."""

    def test_missing_file_is_empty(self, record_file: _pathlib.Path) -> None:
        rec = records.JsonFileRecord(record_file)

        assert rec.settings().all() == {}
        assert not record_file.exists()

    def test_write_survives_reopen(self, record_file: _pathlib.Path) -> None:
        records.JsonFileRecord(record_file).settings().set("notify.sms", True)

        reopened = records.JsonFileRecord(record_file)

        assert reopened.settings().get("notify.sms") is True

    def test_file_is_readable_json(self, record_file: _pathlib.Path) -> None:
        records.JsonFileRecord(record_file).settings().set("theme", "dark")

        text = record_file.read_text(encoding="utf-8")

        assert _json.loads(text) == {"settings": {"theme": "dark"}}
        assert text.endswith("\n")
        assert '\n  "settings"' in text

    def test_no_temp_file_left(self, record_file: _pathlib.Path) -> None:
        records.JsonFileRecord(record_file).settings().set("a", 1)

        assert [p.name for p in record_file.parent.iterdir()] == ["user.json"]

    def test_creates_parent_directories(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "nested" / "dir" / "user.json"

        records.JsonFileRecord(path).settings().set("a", 1)

        assert path.exists()

    def test_multiple_fields_in_one_file(self, record_file: _pathlib.Path) -> None:
        rec = records.JsonFileRecord(record_file, field_names=["settings", "address"])

        rec.settings().set("theme", "dark")
        rec.settings("address").set("city", "Oslo")

        assert _json.loads(record_file.read_text(encoding="utf-8")) == {
            "settings": {"theme": "dark"},
            "address": {"city": "Oslo"},
        }

    def test_unpersisted_write_stays_in_memory(self, record_file: _pathlib.Path) -> None:
        rec = records.JsonFileRecord(record_file, persist=False)

        rec.settings().set("a", 1)

        assert not record_file.exists()
        assert rec.settings().get("a") == 1

        rec.save()

        assert records.JsonFileRecord(record_file).settings().get("a") == 1

    def test_reload_discards_unsaved(self, record_file: _pathlib.Path) -> None:
        rec = records.JsonFileRecord(record_file, persist=False)
        rec.settings().set("a", 1)

        rec.reload()

        assert rec.settings().all() == {}

    def test_empty_file(self, record_file: _pathlib.Path) -> None:
        record_file.write_text("  \n", encoding="utf-8")

        assert records.JsonFileRecord(record_file).settings().all() == {}

    @_pytest.mark.parametrize(
        "content",
        [b"{not json", b"[1, 2, 3]", b'"text"', b'{"settings": {"a": "\xff"}}'],
        ids=["invalid-json", "array", "string", "invalid-utf8"],
    )
    def test_unusable_file(
        self,
        record_file: _pathlib.Path,
        content: bytes,
        caplog: _pytest.LogCaptureFixture,
    ) -> None:
        record_file.write_bytes(content)

        with caplog.at_level(_logging.WARNING, logger="fieldsettings.records"):
            rec = records.JsonFileRecord(record_file)

        assert rec.settings().all() == {}
        assert "Ignoring" in caplog.text

    def test_corrupt_field_value(
        self,
        record_file: _pathlib.Path,
        caplog: _pytest.LogCaptureFixture,
    ) -> None:
        """A field holding a non-object decodes as empty and can be overwritten."""
        record_file.write_text('{"settings": "oops"}', encoding="utf-8")
        rec = records.JsonFileRecord(record_file)

        with caplog.at_level(_logging.WARNING, logger="fieldsettings.store"):
            assert rec.settings().all() == {}

        rec.settings().set("a", 1)

        assert _json.loads(record_file.read_text(encoding="utf-8")) == {"settings": {"a": 1}}

    def test_defaults_are_not_written(self, record_file: _pathlib.Path) -> None:
        rec = records.JsonFileRecord(record_file, defaults={"theme": "light", "size": 12})

        rec.settings().set("size", 14)

        assert _json.loads(record_file.read_text(encoding="utf-8")) == {"settings": {"size": 14}}
        assert rec.settings().all() == {"theme": "light", "size": 14}
