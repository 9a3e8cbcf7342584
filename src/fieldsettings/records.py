"""
Ready-made owning records.

- MemoryRecord: keeps raw field values in a dict. Useful for tests and
  for embedding stores in applications that persist records themselves.
- JsonFileRecord: keeps every settings field of one record in a single
  JSON file on disk, written atomically on save().
"""

from __future__ import annotations

import collections.abc as _abc
import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import fieldsettings.config as config
import fieldsettings.fields as fields
import fieldsettings.validation as validation

_logger = _logging.getLogger(__name__)


class _ConfigurableRecord(fields.HasSettingsFields):
    """Applies per-instance overrides of the registry class attributes."""

    def _configure(
        self,
        *,
        field_names: _abc.Sequence[str] | None,
        defaults: _abc.Mapping[str, _typing.Any] | None,
        defaults_by_field: _abc.Mapping[str, _abc.Mapping[str, _typing.Any]] | None,
        rules: validation.RuleSet,
        rules_by_field: _abc.Mapping[str, validation.RuleSet] | None,
        persist: bool | None,
    ) -> None:
        if field_names is not None:
            self.settings_field_names = tuple(field_names)
        if defaults is not None:
            self.default_settings = defaults
        if defaults_by_field is not None:
            self.default_settings_by_field = defaults_by_field
        if rules is not None:
            self.settings_rules = rules
        if rules_by_field is not None:
            self.settings_rules_by_field = rules_by_field
        self.persist_settings = config.get_settings().persist if persist is None else persist


class MemoryRecord(_ConfigurableRecord):
    """
    Record whose raw settings fields live in memory.

    Attributes:
        values: Current raw value of each field.
        saved_values: Raw values as of the last save().
        save_count: Number of save() calls so far.
    """

    def __init__(
        self,
        values: _abc.Mapping[str, str | None] | None = None,
        *,
        field_names: _abc.Sequence[str] | None = None,
        defaults: _abc.Mapping[str, _typing.Any] | None = None,
        defaults_by_field: _abc.Mapping[str, _abc.Mapping[str, _typing.Any]] | None = None,
        rules: validation.RuleSet = None,
        rules_by_field: _abc.Mapping[str, validation.RuleSet] | None = None,
        persist: bool | None = None,
    ) -> None:
        self.values: dict[str, str | None] = dict(values or {})
        self.saved_values: dict[str, str | None] = dict(self.values)
        self.save_count = 0
        self._configure(
            field_names=field_names,
            defaults=defaults,
            defaults_by_field=defaults_by_field,
            rules=rules,
            rules_by_field=rules_by_field,
            persist=persist,
        )

    def get_settings_value(self, field: str) -> str | None:
        return self.values.get(field)

    def set_settings_value(self, field: str, raw: str) -> None:
        self.values[field] = raw

    def save(self) -> None:
        self.saved_values = dict(self.values)
        self.save_count += 1

    @property
    def dirty(self) -> bool:
        """True when values changed since the last save()."""
        return self.values != self.saved_values


class JsonFileRecord(_ConfigurableRecord):
    """
    Record stored as one JSON object on disk, one key per settings field.

    Field values are kept as JSON objects in the file so it stays readable
    by hand. A field holding anything else is passed through as-is and the
    store decodes it defensively.
    """

    def __init__(
        self,
        path: str | _pathlib.Path,
        *,
        field_names: _abc.Sequence[str] | None = None,
        defaults: _abc.Mapping[str, _typing.Any] | None = None,
        defaults_by_field: _abc.Mapping[str, _abc.Mapping[str, _typing.Any]] | None = None,
        rules: validation.RuleSet = None,
        rules_by_field: _abc.Mapping[str, validation.RuleSet] | None = None,
        persist: bool | None = None,
    ) -> None:
        self._path = _pathlib.Path(path)
        self._configure(
            field_names=field_names,
            defaults=defaults,
            defaults_by_field=defaults_by_field,
            rules=rules,
            rules_by_field=rules_by_field,
            persist=persist,
        )
        self._data: dict[str, _typing.Any] = self.load()

    @property
    def path(self) -> _pathlib.Path:
        return self._path

    def load(self) -> dict[str, _typing.Any]:
        """
        Read the record file.

        Returns an empty record for missing, empty or invalid files.
        """
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
            if not raw.strip():
                return {}
            data = _json.loads(raw)
        except ValueError as e:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors
            _logger.warning("Ignoring invalid record file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring record file %s: top level is not an object", self._path)
            return {}
        return data

    def reload(self) -> None:
        """Discard unsaved changes and re-read the file."""
        self._data = self.load()

    def get_settings_value(self, field: str) -> str | None:
        value = self._data.get(field)
        if isinstance(value, (dict, list)):
            return _json.dumps(value, **config.get_settings().json_dumps_kwargs())
        return value

    def set_settings_value(self, field: str, raw: str) -> None:
        self._data[field] = _json.loads(raw)

    def save(self) -> None:
        """Atomically write the record by writing a temp file then replacing."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            _json.dump(self._data, f, indent=2, **config.get_settings().json_dumps_kwargs())
            f.write("\n")
        tmp_path.replace(self._path)
        _logger.debug("Wrote record file %s", self._path)
