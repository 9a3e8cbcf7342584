"""
Overlay a stored document onto a default document.

merge_defaults() is the recursive read view: nested mappings present on
both sides are merged key by key, anything else is replaced outright by
the stored side. merge_flat() is a plain last-writer-wins union used on
already-flattened documents.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import fieldsettings.utils.flatten as flatten
import fieldsettings.utils.frozen as frozen


def _is_mergeable(value: _typing.Any) -> bool:
    """Mappings merge key by key unless they are list-like."""
    return isinstance(value, _abc.Mapping) and not flatten.is_sequential(value)


def merge_defaults(
    default_doc: _abc.Mapping[str, _typing.Any],
    stored_doc: _abc.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Deep merge two documents, with the stored document taking priority.

    Neither input is modified, and the result shares no containers with
    them.

    Args:
        default_doc: The base (default) document.
        stored_doc: The overriding (stored) document.

    Returns:
        New merged dict.
    """
    result = {key: frozen.thaw(value) for key, value in default_doc.items()}
    for key, value in stored_doc.items():
        if key in result and _is_mergeable(result[key]) and _is_mergeable(value):
            result[key] = merge_defaults(result[key], value)
        else:
            result[key] = frozen.thaw(value)
    return result


def merge_flat(*flattened: _abc.Mapping[str, _typing.Any]) -> dict[str, _typing.Any]:
    """Union flattened documents; later arguments win on equal keys."""
    result: dict[str, _typing.Any] = {}
    for layer in flattened:
        result.update(layer)
    return result
