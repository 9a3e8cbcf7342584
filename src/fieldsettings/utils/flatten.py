"""
Flatten nested documents to dot-path keys, and rebuild them.

Only associative values (non-empty, non-sequential mappings) are
descended into. Lists and list-like mappings are opaque leaves keyed by
their parent path, so they survive a flatten/unflatten round trip intact.

Example:
    >>> flatten({"notify": {"email": True, "sms": False}, "tags": ["a"]})
    {'notify.email': True, 'notify.sms': False, 'tags': ['a']}
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import fieldsettings.utils.dot_path as dot_path


def is_sequential(value: _typing.Any) -> bool:
    """
    Check whether a value is list-like.

    Lists and tuples are sequential. A mapping is sequential when its keys
    are exactly 0..n-1 in order, either as ints or as decimal strings
    (JSON objects like ``{"0": "a", "1": "b"}``). Empty containers are not
    sequential.
    """
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, _abc.Mapping) and value:
        for expected, key in enumerate(value):
            if key != expected and key != str(expected):
                return False
        return True
    return False


def is_associative(value: _typing.Any) -> bool:
    """Check whether a value is a non-empty, non-sequential mapping."""
    return isinstance(value, _abc.Mapping) and bool(value) and not is_sequential(value)


def flatten(
    document: _abc.Mapping[str, _typing.Any],
    prefix: str = "",
    delimiter: str = dot_path.DEFAULT_DELIMITER,
) -> dict[str, _typing.Any]:
    """
    Flatten a nested document into a single-level dict of dot paths.

    Args:
        document: The nested document.
        prefix: Path prefix prepended to every key (used in recursion).
        delimiter: Segment separator.

    Returns:
        Dict mapping full dot paths to leaf values.
    """
    results: dict[str, _typing.Any] = {}
    for key, value in document.items():
        if is_associative(value):
            results.update(flatten(value, f"{prefix}{key}{delimiter}", delimiter))
        else:
            results[f"{prefix}{key}"] = value
    return results


def unflatten(
    flattened: _abc.Mapping[str, _typing.Any],
    delimiter: str = dot_path.DEFAULT_DELIMITER,
) -> dict[str, _typing.Any]:
    """Rebuild a nested document by setting every flat key into a fresh dict."""
    result: dict[str, _typing.Any] = {}
    for path, value in flattened.items():
        dot_path.set(result, path, value, delimiter)
    return result
