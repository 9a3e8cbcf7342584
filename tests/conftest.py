"""
Shared pytest fixtures for fieldsettings tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import typing as _typing

import pytest as _pytest

import fieldsettings.config as config
import fieldsettings.records as records

# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: _pytest.MonkeyPatch) -> _typing.Iterator[None]:
    """Drop FIELDSETTINGS_* env vars and the cached Settings around each test."""
    for key in list(_os.environ):
        if key.startswith("FIELDSETTINGS_"):
            monkeypatch.delenv(key, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


# =============================================================================
# Documents
# =============================================================================


@_pytest.fixture
def preference_defaults() -> dict[str, _typing.Any]:
    """Default document used across store tests."""
    return {"theme": "light", "notify": {"email": True, "sms": False}}


@_pytest.fixture
def preference_overrides() -> dict[str, _typing.Any]:
    """Stored document overriding one nested default."""
    return {"notify": {"sms": True}}


@_pytest.fixture
def theme_rules() -> dict[str, _typing.Any]:
    """Rule set: theme must be one of light/dark."""
    return {"theme": _typing.Literal["light", "dark"]}


# =============================================================================
# Records
# =============================================================================


@_pytest.fixture
def record(
    preference_defaults: dict[str, _typing.Any],
    preference_overrides: dict[str, _typing.Any],
    theme_rules: dict[str, _typing.Any],
) -> records.MemoryRecord:
    """In-memory record with defaults, one stored override and theme rules."""
    return records.MemoryRecord(
        {"settings": _json.dumps(preference_overrides)},
        defaults=preference_defaults,
        rules=theme_rules,
    )


@_pytest.fixture
def blank_record() -> records.MemoryRecord:
    """In-memory record with no defaults, no rules and nothing stored."""
    return records.MemoryRecord()
