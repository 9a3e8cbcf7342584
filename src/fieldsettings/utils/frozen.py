"""
Immutable snapshots of default documents.

A record's default document is copied into a snapshot once per read, so
nothing a caller does to the store's ``defaults`` (or to the record's
own dict afterwards) can leak into merged views. Snapshots are plain
JSON-shaped trees:

- mappings become FrozenMapping
- lists become FrozenList, a tuple that still compares equal to lists
- tuples and scalars are kept as they are

thaw() turns a snapshot (or any document) back into independent,
mutable dicts and lists; merged views are always built from thawed
values.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import typing as _typing


class FrozenList(tuple):  # type: ignore[type-arg]
    """A frozen list. Equal to a list or tuple with the same items."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, list):
            return list(self) == other
        return tuple.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FrozenList({list(self)!r})"


class FrozenMapping(_abc.Mapping[str, _typing.Any]):
    """
    Deep, read-only snapshot of a document.

    The source mapping is copied on construction; later changes to it
    don't show through.

    Example:
        >>> defaults = FrozenMapping({"notify": {"email": True}})
        >>> defaults["notify"]["email"]
        True
        >>> defaults["notify"]["email"] = False  # TypeError: immutable
    """

    __slots__ = ("_data",)

    def __init__(self, data: _abc.Mapping[str, _typing.Any] | None = None) -> None:
        self._data: dict[str, _typing.Any] = {
            key: freeze(value) for key, value in (data or {}).items()
        }

    def __getitem__(self, key: str) -> _typing.Any:
        return self._data[key]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrozenMapping({thaw(self)!r})"


def freeze(value: _typing.Any) -> _typing.Any:
    """Snapshot a value: mappings and lists are frozen, everything else is kept."""
    if isinstance(value, (FrozenMapping, FrozenList)):
        return value
    if isinstance(value, _abc.Mapping):
        return FrozenMapping(value)
    if isinstance(value, list):
        return FrozenList(freeze(item) for item in value)
    return value


def thaw(value: _typing.Any) -> _typing.Any:
    """
    Deep copy a value into plain, mutable containers.

    Mappings (frozen or not) become dicts, lists and FrozenLists become
    lists, other tuples stay tuples. Scalars are deep-copied.
    """
    if isinstance(value, _abc.Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, FrozenList)):
        return [thaw(item) for item in value]
    if isinstance(value, tuple):
        return tuple(thaw(item) for item in value)
    return _copy.deepcopy(value)
