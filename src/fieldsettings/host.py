"""
The contract an owning record must satisfy to carry settings fields.

A host keeps the raw JSON text of each settings field, knows which field
names are registered, and supplies the defaults and validation rules for
each of them. Stores check this contract up front and refuse hosts that
don't implement it.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import fieldsettings.validation as validation


@_typing.runtime_checkable
class SettingsHost(_typing.Protocol):
    """Owning record for one or more JSON settings fields."""

    settings_field_names: _abc.Sequence[str]
    """Registered field names. The first one is the default field."""

    persist_settings: bool
    """Whether to save() the record after every successful write."""

    def default_settings_field_name(self) -> str:
        """Return the field used when none is named."""
        ...

    def get_settings_value(self, field: str) -> str | None:
        """Return the raw serialized value of a field (None if unset)."""
        ...

    def set_settings_value(self, field: str, raw: str) -> None:
        """Replace the raw serialized value of a field."""
        ...

    def get_default_settings(self, field: str) -> _abc.Mapping[str, _typing.Any]:
        """Return the default document for a field."""
        ...

    def get_settings_rules(self, field: str) -> validation.RuleSet:
        """Return the validation rules for a field."""
        ...

    def save(self) -> None:
        """Persist the record itself."""
        ...
