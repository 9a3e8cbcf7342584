"""
Mixin that registers settings fields on a record class.

Records list their JSON settings fields in ``settings_field_names`` and
get a store for any of them through settings():

    class User(HasSettingsFields, MemoryRecord):
        settings_field_names = ("settings", "address")
        default_settings_by_field = {"address": {"country": "NO"}}

    user.settings("address").get("country")

The record class still has to provide raw field access and save(), as
described by fieldsettings.host.SettingsHost.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import fieldsettings.errors as errors
import fieldsettings.store as store
import fieldsettings.validation as validation


class HasSettingsFields:
    """Registry side of the settings host contract."""

    settings_field_names: _abc.Sequence[str] = ("settings",)
    """JSON fields managed as settings. The first one is the default."""

    persist_settings: bool = True
    """Save the record after every successful write."""

    default_settings: _abc.Mapping[str, _typing.Any] = {}
    """Defaults shared by every field without its own entry below."""

    default_settings_by_field: _abc.Mapping[str, _abc.Mapping[str, _typing.Any]] = {}
    """Per-field defaults."""

    settings_rules: validation.RuleSet = None
    """Rules shared by every field without its own entry below."""

    settings_rules_by_field: _abc.Mapping[str, validation.RuleSet] = {}
    """Per-field rules."""

    def default_settings_field_name(self) -> str:
        if not self.settings_field_names:
            raise errors.ConfigurationError(
                f"{type(self).__name__} has no registered settings fields."
            )
        return self.settings_field_names[0]

    def get_default_settings(self, field: str) -> _abc.Mapping[str, _typing.Any]:
        return self.default_settings_by_field.get(field, self.default_settings)

    def get_settings_rules(self, field: str) -> validation.RuleSet:
        return self.settings_rules_by_field.get(field, self.settings_rules)

    def settings(
        self,
        field: str | None = None,
        *,
        validator: validation.Validator | None = None,
    ) -> store.FieldSettingsStore:
        """
        Get the store for a settings field.

        Args:
            field: Field name. Defaults to the first registered field.
            validator: Validator for writes (default: PydanticValidator).

        Raises:
            ConfigurationError: If field is not registered.
        """
        field = field or self.default_settings_field_name()
        if field not in self.settings_field_names:
            raise errors.ConfigurationError(f"Field [{field}] is not registered.", field=field)
        return store.FieldSettingsStore(self, field, validator=validator)  # type: ignore[arg-type]

    def settings_stores(
        self,
        *,
        validator: validation.Validator | None = None,
    ) -> dict[str, store.FieldSettingsStore]:
        """Return a store for every registered field, keyed by field name."""
        return {
            field: self.settings(field, validator=validator)
            for field in self.settings_field_names
        }
