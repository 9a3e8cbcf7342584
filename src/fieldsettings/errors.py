"""
Exception types raised by settings stores.

- ConfigurationError: the store cannot be set up (unregistered field,
  host without the settings capability, unusable defaults file).
- ValidationError: a document was rejected before being persisted.

Errors raised by the host while persisting are not wrapped; they reach
the caller unchanged.
"""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for all fieldsettings errors."""

    pass


class ConfigurationError(SettingsError):
    """Raised when a store is requested for something that isn't set up."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ValidationError(SettingsError):
    """
    Raised when a document violates the owning record's rules.

    Attributes:
        violations: Maps dot paths to the messages reported for them.
            The whole document is reported under "".
        field: The settings field being written, if known.
    """

    def __init__(
        self,
        violations: dict[str, list[str]],
        *,
        field: str | None = None,
    ) -> None:
        self.violations = violations
        self.field = field
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        target = f"field '{self.field}'" if self.field else "document"
        lines = [f"Settings for {target} failed validation:"]
        for path, messages in self.violations.items():
            for message in messages:
                lines.append(f"  {path or '<document>'}: {message}")
        return "\n".join(lines)

    @property
    def paths(self) -> list[str]:
        """Dot paths that failed validation, in report order."""
        return list(self.violations)
