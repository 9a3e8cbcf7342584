"""
Library configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with FIELDSETTINGS_ prefix
3. .env file named by FIELDSETTINGS_ENV_FILE (if present)
4. Field defaults below

Example:
  FIELDSETTINGS_DELIMITER=/
  FIELDSETTINGS_STORE_OVERRIDES_ONLY=false
"""

import functools as _functools
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit FIELDSETTINGS_ENV_FILE is honored. If it is set but
    the file doesn't exist, no .env is loaded (no silent fallback).
    """
    if env_file := _os.environ.get("FIELDSETTINGS_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    fieldsettings configuration.

    Stores and records read these values whenever the caller doesn't pass
    an explicit override.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="FIELDSETTINGS_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    delimiter: str = _pydantic.Field(default=".", min_length=1)
    """Separator between dot-path segments."""

    persist: bool = True
    """Save the owning record after every successful write."""

    store_overrides_only: bool = True
    """Apply writes to the stored overrides instead of the merged view."""

    json_sort_keys: bool = False
    """Sort object keys when encoding stored documents."""

    json_ensure_ascii: bool = False
    """Escape non-ASCII characters when encoding stored documents."""

    log_level: _typing.Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    """Log level used by the command line interface."""

    @_pydantic.field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: _typing.Any) -> _typing.Any:
        if isinstance(value, str):
            return value.upper()
        return value

    def json_dumps_kwargs(self) -> dict[str, _typing.Any]:
        """Keyword arguments for json.dumps() when encoding documents."""
        return {
            "sort_keys": self.json_sort_keys,
            "ensure_ascii": self.json_ensure_ascii,
        }


@_functools.cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings, loading them on first use.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
