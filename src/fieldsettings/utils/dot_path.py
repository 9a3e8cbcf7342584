"""
Dot-path access over nested documents.

A dot path such as ``"notify.email"`` names a location inside a nested
dict. Segments are matched literally against mapping keys; there is no
index syntax for lists. A missing segment anywhere along the path means
"not found", never an error.

Example:
    >>> doc = {"notify": {"email": True}}
    >>> get(doc, "notify.email")
    True
    >>> set(doc, "notify.sms", False)
    {'notify': {'email': True, 'sms': False}}
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

DEFAULT_DELIMITER = "."

# Sentinel for "no value at this path"
_MISSING = object()


def split(path: str, delimiter: str = DEFAULT_DELIMITER) -> tuple[str, ...]:
    """
    Split a dot path into its segments.

    Args:
        path: The dot path (e.g., "notify.email").
        delimiter: Segment separator.

    Returns:
        Tuple of segments. An empty path yields an empty tuple.

    Raises:
        TypeError: If path is not a string.
    """
    if not isinstance(path, str):
        raise TypeError(f"Path must be a string, got {type(path).__name__}")
    if not path:
        return ()
    return tuple(path.split(delimiter))


def _lookup(
    document: _abc.Mapping[str, _typing.Any],
    path: str,
    delimiter: str,
) -> _typing.Any:
    """Walk the path through mappings, returning _MISSING if it breaks."""
    current: _typing.Any = document
    for key in split(path, delimiter):
        if not isinstance(current, _abc.Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def has(
    document: _abc.Mapping[str, _typing.Any],
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
) -> bool:
    """Check whether a value exists at path. The empty path names the document itself."""
    if not path:
        return True
    return _lookup(document, path, delimiter) is not _MISSING


def get(
    document: _abc.Mapping[str, _typing.Any],
    path: str | None,
    default: _typing.Any = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> _typing.Any:
    """
    Get the value at path.

    Args:
        document: The document to read.
        path: Dot path. None or "" returns the document itself.
        default: Returned when any segment is missing.
        delimiter: Segment separator.

    Returns:
        The value at path, or default.
    """
    if not path:
        return document
    value = _lookup(document, path, delimiter)
    return default if value is _MISSING else value


def set(  # noqa: A001 - mirrors the document operation name
    document: dict[str, _typing.Any],
    path: str,
    value: _typing.Any,
    delimiter: str = DEFAULT_DELIMITER,
) -> dict[str, _typing.Any]:
    """
    Set a value at path, creating intermediate dicts as needed.

    An intermediate segment that exists but does not hold a dict is
    replaced by an empty dict. The document is modified in place.

    Args:
        document: The document to modify.
        path: Dot path to write.
        value: The value to store (stored as-is, not copied).
        delimiter: Segment separator.

    Returns:
        The same document, for chaining.

    Raises:
        ValueError: If path is empty.
    """
    keys = split(path, delimiter)
    if not keys:
        raise ValueError("Cannot set a value at an empty path")

    current = document
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return document


def delete(
    document: dict[str, _typing.Any],
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
) -> dict[str, _typing.Any]:
    """
    Remove the value at path.

    Navigates to the parent and deletes the final key if it exists.
    Ancestors stay in place even when they end up empty. Missing paths
    are a no-op.

    Args:
        document: The document to modify.
        path: Dot path to remove.
        delimiter: Segment separator.

    Returns:
        The same document, for chaining.
    """
    keys = split(path, delimiter)
    if not keys:
        return document

    current: _typing.Any = document
    for key in keys[:-1]:
        if not isinstance(current, dict) or key not in current:
            return document  # Path doesn't exist
        current = current[key]

    if isinstance(current, dict) and keys[-1] in current:
        del current[keys[-1]]
    return document
