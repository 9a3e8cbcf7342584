"""
fieldsettings - hierarchical settings stored in JSON record fields.

A record exposes one or more JSON fields as settings stores with default
overlay, dot-path access, validation and save-on-write.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("fieldsettings")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from fieldsettings.errors import (  # noqa: E402
    ConfigurationError,
    SettingsError,
    ValidationError,
)
from fieldsettings.fields import HasSettingsFields  # noqa: E402
from fieldsettings.host import SettingsHost  # noqa: E402
from fieldsettings.records import JsonFileRecord, MemoryRecord  # noqa: E402
from fieldsettings.store import AbstractSettingsStore, FieldSettingsStore  # noqa: E402
from fieldsettings.validation import (  # noqa: E402
    NullValidator,
    PydanticValidator,
    Required,
    Validator,
)

__all__ = [
    "__version__",
    "__version_info__",
    "AbstractSettingsStore",
    "ConfigurationError",
    "FieldSettingsStore",
    "HasSettingsFields",
    "JsonFileRecord",
    "MemoryRecord",
    "NullValidator",
    "PydanticValidator",
    "Required",
    "SettingsError",
    "SettingsHost",
    "ValidationError",
    "Validator",
]
