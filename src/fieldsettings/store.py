"""
Settings stores: dot-path read/write access to one JSON field of a host.

Every read works on the merged view (stored document overlaid on the
default document). Every write builds a working copy, changes it, and
hands the result to apply() in a single call, so a batch of N changes
costs one persistence round trip. The working copy is the stored
document itself, so defaults never end up persisted; stores created with
store_overrides_only=False start from the full merged view instead.

Example:
    >>> store = FieldSettingsStore(record, "preferences")
    >>> store.get("notify.email")
    True
    >>> store.set("notify.sms", True).get("notify")
    {'email': True, 'sms': True}

Thread safety: none. Concurrent writers race at whole-document
granularity; serialize access outside the store if that matters.
"""

from __future__ import annotations

import abc as _abc
import collections.abc as _cabc
import json as _json
import logging as _logging
import typing as _typing

import fieldsettings.config as config
import fieldsettings.errors as errors
import fieldsettings.host as host_module
import fieldsettings.utils.dot_path as dot_path
import fieldsettings.utils.flatten as flatten
import fieldsettings.utils.frozen as frozen
import fieldsettings.utils.merge as merge
import fieldsettings.validation as validation

_logger = _logging.getLogger(__name__)

SettingsValues: _typing.TypeAlias = (
    "_cabc.Mapping[str, _typing.Any] | _cabc.Iterable[tuple[str, _typing.Any]]"
)


def decode_document(raw: _typing.Any, *, field: str | None = None) -> dict[str, _typing.Any]:
    """
    Decode a raw field value into a document.

    Missing values, invalid JSON and JSON that isn't an object all decode
    to an empty document. Only the last two are logged, since a missing
    value is the normal state of a fresh record.

    Args:
        raw: JSON text (str or bytes), an already-decoded mapping, or None.
        field: Field name, for log messages.

    Returns:
        The decoded document (a new dict).
    """
    if raw is None:
        return {}

    if isinstance(raw, _cabc.Mapping):
        return frozen.thaw(raw)

    try:
        decoded = _json.loads(raw)
    except (TypeError, ValueError) as e:
        _logger.warning("Ignoring undecodable settings in field %r: %s", field, e)
        return {}

    if isinstance(decoded, dict):
        return decoded

    # "[]" is what an empty field looks like when written by array-based hosts
    if decoded != []:
        _logger.warning(
            "Ignoring settings in field %r: expected a JSON object, got %s",
            field,
            type(decoded).__name__,
        )
    return {}


class AbstractSettingsStore(_abc.ABC):
    """
    Read/write contract over one settings field of a host.

    Subclasses implement apply(), which receives the finished document of
    every write and is responsible for validating and persisting it.
    """

    def __init__(
        self,
        host: host_module.SettingsHost,
        field: str | None = None,
        *,
        validator: validation.Validator | None = None,
        delimiter: str | None = None,
        store_overrides_only: bool | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            host: The owning record.
            field: Settings field name. Defaults to the host's default field.
            validator: Validator for writes. Defaults to PydanticValidator.
            delimiter: Dot-path delimiter. Defaults to Settings.delimiter.
            store_overrides_only: Apply writes to the stored document rather
                than the merged view. Defaults to Settings.store_overrides_only.

        Raises:
            ConfigurationError: If host lacks the settings capability or
                field is not registered on it.
        """
        if not isinstance(host, host_module.SettingsHost):
            raise errors.ConfigurationError(
                f"Wrong host {type(host).__name__}: missing the settings field capability."
            )

        settings = config.get_settings()
        self._host = host
        self._field = field or host.default_settings_field_name()
        self._delimiter = delimiter or settings.delimiter
        self._store_overrides_only = (
            settings.store_overrides_only if store_overrides_only is None else store_overrides_only
        )
        self._validator: validation.Validator = validator or validation.PydanticValidator(
            delimiter=self._delimiter
        )

        if self._field not in host.settings_field_names:
            raise errors.ConfigurationError(
                f"Field [{self._field}] is not registered.",
                field=self._field,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(host={type(self._host).__name__}, field={self._field!r})"

    @property
    def host(self) -> host_module.SettingsHost:
        return self._host

    @property
    def field(self) -> str:
        return self._field

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def validator(self) -> validation.Validator:
        return self._validator

    # =========================================================================
    # Reading
    # =========================================================================

    @property
    def defaults(self) -> frozen.FrozenMapping:
        """Read-only snapshot of the default document."""
        return self._default_document()

    def _default_document(self) -> frozen.FrozenMapping:
        return frozen.FrozenMapping(self._host.get_default_settings(self._field))

    def stored(self) -> dict[str, _typing.Any]:
        """Return the stored document, decoded from the host's field."""
        return decode_document(self._host.get_settings_value(self._field), field=self._field)

    def all(self) -> dict[str, _typing.Any]:
        """Return the stored document merged over the defaults."""
        return merge.merge_defaults(self._default_document(), self.stored())

    def all_flattened(self) -> dict[str, _typing.Any]:
        """
        Return the flattened defaults overlaid by the flattened stored document.

        Both sides are flattened before they are combined, so a stored scalar
        replacing a default mapping shows up next to the default's nested
        paths instead of hiding them, unlike all().
        """
        return merge.merge_flat(
            frozen.thaw(flatten.flatten(self._default_document(), delimiter=self._delimiter)),
            flatten.flatten(self.stored(), delimiter=self._delimiter),
        )

    def exist(self) -> bool:
        """Check whether the merged view has any top-level keys."""
        return len(self.all()) > 0

    def empty(self) -> bool:
        """Check whether the merged view has no top-level keys."""
        return len(self.all()) <= 0

    def has(self, path: str) -> bool:
        return dot_path.has(self.all(), path, self._delimiter)

    def get(self, path: str | None = None, default: _typing.Any = None) -> _typing.Any:
        """
        Get the value at path, or the whole merged view when path is omitted.

        Args:
            path: Dot path to read.
            default: Returned when path is missing.
        """
        if not path:
            return self.all()
        return dot_path.get(self.all(), path, default, self._delimiter)

    def get_multiple(
        self,
        paths: _cabc.Iterable[str] | None = None,
        default: _typing.Any = None,
    ) -> dict[str, _typing.Any]:
        """
        Get several paths as one nested document.

        Args:
            paths: Dot paths to read. None returns the whole merged view.
            default: Value used for each missing path.

        Returns:
            A new document holding only the requested paths.
        """
        rebuilt = flatten.unflatten(
            flatten.flatten(self.all(), delimiter=self._delimiter),
            delimiter=self._delimiter,
        )
        if paths is None:
            return rebuilt

        if isinstance(paths, str):
            paths = [paths]

        result: dict[str, _typing.Any] = {}
        for path in paths:
            dot_path.set(
                result,
                path,
                dot_path.get(rebuilt, path, default, self._delimiter),
                self._delimiter,
            )
        return result

    # =========================================================================
    # Writing
    # =========================================================================

    def _working_copy(self) -> dict[str, _typing.Any]:
        """Document that mutations are applied to before apply()."""
        if self._store_overrides_only:
            return self.stored()
        return self.all()

    def set(self, path: str, value: _typing.Any) -> _typing.Self:
        """Set a single value and persist."""
        document = self._working_copy()
        dot_path.set(document, path, value, self._delimiter)
        return self.apply(document)

    def update(self, path: str, value: _typing.Any) -> _typing.Self:
        """Alias for set()."""
        return self.set(path, value)

    def delete(self, path: str | None = None) -> _typing.Self:
        """
        Delete a path, or clear the whole document when path is omitted.

        Paths that have a default value fall back to it on the next read.
        """
        if path is None:
            document: dict[str, _typing.Any] = {}
        else:
            document = self._working_copy()
            dot_path.delete(document, path, self._delimiter)
        return self.apply(document)

    def clear(self) -> _typing.Self:
        """Remove every stored value."""
        return self.delete()

    def set_multiple(self, values: SettingsValues) -> _typing.Self:
        """
        Set several values with a single persistence call.

        Args:
            values: Mapping of path → value, or an iterable of
                (path, value) pairs. Later pairs win on equal paths.
        """
        pairs = values.items() if isinstance(values, _cabc.Mapping) else values
        document = self._working_copy()
        for path, value in pairs:
            dot_path.set(document, path, value, self._delimiter)
        return self.apply(document)

    def delete_multiple(self, paths: _cabc.Iterable[str]) -> _typing.Self:
        """Delete several paths with a single persistence call."""
        if isinstance(paths, str):
            paths = [paths]
        document = self._working_copy()
        for path in paths:
            dot_path.delete(document, path, self._delimiter)
        return self.apply(document)

    @_abc.abstractmethod
    def apply(self, document: dict[str, _typing.Any] | None = None) -> _typing.Self:
        """
        Validate and persist a document as the new stored document.

        Implementations must store exactly the document given (defaults
        are never merged in), and must not write anything if validation
        fails.

        Raises:
            ValidationError: If the document breaks the host's rules.
        """
        ...


class FieldSettingsStore(AbstractSettingsStore):
    """Store that writes JSON text back into the host's field."""

    def apply(self, document: dict[str, _typing.Any] | None = None) -> _typing.Self:
        document = {} if document is None else document

        self._validator.validate(
            merge.merge_defaults(self._default_document(), document),
            self._host.get_settings_rules(self._field),
            field=self._field,
        )

        raw = _json.dumps(document, **config.get_settings().json_dumps_kwargs())
        self._host.set_settings_value(self._field, raw)
        _logger.debug("Stored %d top-level keys in field %r", len(document), self._field)

        if self._host.persist_settings:
            self._host.save()
            _logger.debug("Saved %s after writing field %r", type(self._host).__name__, self._field)

        return self
