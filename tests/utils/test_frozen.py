"""
Tests for default-document snapshots (FrozenMapping, FrozenList) and thaw().

Stores hand out default documents as snapshots so callers can't change a
record's defaults by accident.
"""

import pytest as _pytest

import fieldsettings.records as records
import fieldsettings.utils.frozen as frozen


class TestFrozenMapping:
    """Tests for FrozenMapping snapshots."""

    def test_reads_like_a_dict(self) -> None:
        defaults = frozen.FrozenMapping({"theme": "light", "notify": {"email": True}})

        assert defaults["theme"] == "light"
        assert len(defaults) == 2
        assert set(defaults) == {"theme", "notify"}
        assert "notify" in defaults

    def test_none_is_empty(self) -> None:
        assert frozen.FrozenMapping(None) == {}

    def test_nested_containers_are_frozen(self) -> None:
        defaults = frozen.FrozenMapping({"notify": {"channels": ["email"]}})

        assert isinstance(defaults["notify"], frozen.FrozenMapping)
        assert isinstance(defaults["notify"]["channels"], frozen.FrozenList)

    def test_immutable(self) -> None:
        defaults = frozen.FrozenMapping({"notify": {"email": True}})

        with _pytest.raises(TypeError):
            defaults["theme"] = "dark"  # type: ignore[index]
        with _pytest.raises(TypeError):
            defaults["notify"]["email"] = False  # type: ignore[index]

    def test_snapshot_ignores_later_source_changes(self) -> None:
        source = {"notify": {"email": True}, "tags": ["a"]}
        defaults = frozen.FrozenMapping(source)

        source["notify"]["email"] = False
        source["tags"].append("b")
        source["theme"] = "dark"

        assert defaults == {"notify": {"email": True}, "tags": ["a"]}

    def test_eq_with_plain_document(self) -> None:
        defaults = frozen.FrozenMapping({"a": {"b": [1, 2]}})

        assert defaults == {"a": {"b": [1, 2]}}
        assert defaults != {"a": {"b": [1]}}

    def test_not_hashable(self) -> None:
        with _pytest.raises(TypeError, match="unhashable"):
            hash(frozen.FrozenMapping({"a": 1}))


class TestFrozenList:
    """Tests for frozen lists inside snapshots."""

    def test_equal_to_list_and_tuple(self) -> None:
        items = frozen.freeze([1, 2])

        assert items == [1, 2]
        assert items == (1, 2)
        assert not (items != [1, 2])
        assert items != [2, 1]

    def test_immutable(self) -> None:
        items = frozen.freeze([1])

        with _pytest.raises(TypeError):
            items[0] = 2
        with _pytest.raises(AttributeError):
            items.append(2)

    def test_treated_as_sequence_leaf(self) -> None:
        """Flattening a snapshot keeps frozen lists as single values."""
        rec = records.MemoryRecord(defaults={"tags": ["a", "b"]})

        assert rec.settings().all_flattened() == {"tags": ["a", "b"]}
        assert type(rec.settings().all_flattened()["tags"]) is list


class TestFreezeAndThaw:
    """Tests for freeze() and thaw()."""

    def test_freeze_leaves_scalars_and_tuples(self) -> None:
        assert frozen.freeze("text") == "text"
        assert frozen.freeze(5) == 5
        assert type(frozen.freeze((1, 2))) is tuple

    def test_freeze_already_frozen_is_same_object(self) -> None:
        view = frozen.FrozenMapping({"a": 1})

        assert frozen.freeze(view) is view

    def test_thaw_returns_plain_containers(self) -> None:
        view = frozen.FrozenMapping({"a": {"b": [1, {"c": 2}]}})

        result = frozen.thaw(view)

        assert result == {"a": {"b": [1, {"c": 2}]}}
        assert type(result) is dict
        assert type(result["a"]["b"]) is list
        assert type(result["a"]["b"][1]) is dict

    def test_thaw_is_independent_copy(self) -> None:
        source = {"a": {"b": [1]}}

        copy = frozen.thaw(source)
        copy["a"]["b"].append(2)

        assert source == {"a": {"b": [1]}}

    def test_thaw_keeps_tuples(self) -> None:
        result = frozen.thaw({"pair": (1, [2])})

        assert result == {"pair": (1, [2])}
        assert type(result["pair"]) is tuple
