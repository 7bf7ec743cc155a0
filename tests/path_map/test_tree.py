"""Tests for the plain-dict helpers: copying, marker stripping, flatten."""

import pytest as _pytest

import dotprops.errors as errors
import dotprops.path_map._tree as _tree

MARKER = "[=]"


class TestOwn:
    """own() makes caller-independent copies with string keys."""

    def test_nested_keys_stringified(self) -> None:
        assert _tree.own({1: {2: "x"}}) == {"1": {"2": "x"}}

    def test_tuples_become_lists(self) -> None:
        assert _tree.own({"a": (1, 2)}) == {"a": [1, 2]}

    def test_containers_are_copied(self) -> None:
        source = {"a": {"b": [1]}}

        owned = _tree.own(source)
        source["a"]["b"].append(2)

        assert owned == {"a": {"b": [1]}}

    def test_opaque_values_kept_by_reference(self) -> None:
        marker = object()

        assert _tree.own({"a": marker})["a"] is marker


class TestStripMarkers:
    """strip_markers removes the value marker at every depth."""

    def test_strips_every_level(self) -> None:
        tree = {MARKER: 1, "b": {MARKER: 2, "c": {MARKER: 3, "d": 4}}}

        assert _tree.strip_markers(tree) == {"b": {"c": {"d": 4}}}

    def test_strips_inside_lists(self) -> None:
        assert _tree.strip_markers({"l": [{MARKER: 1, "x": 2}]}) == {"l": [{"x": 2}]}

    def test_does_not_modify_input(self) -> None:
        tree = {MARKER: 1, "b": 2}

        _tree.strip_markers(tree)

        assert tree == {MARKER: 1, "b": 2}


class TestFlatten:
    """flatten() joins nested keys into flat paths."""

    def test_nested_leaves(self) -> None:
        tree = {"a": {"b": 1, "c": {"d": 2}}, "e": 3}

        assert _tree.flatten(tree) == {"a.b": 1, "a.c.d": 2, "e": 3}

    def test_marker_collapses_onto_owner(self) -> None:
        tree = {"a": {MARKER: 1, "b": 2}}

        assert _tree.flatten(tree) == {"a": 1, "a.b": 2}

    def test_marker_collapse_with_multichar_delimiter(self) -> None:
        tree = {"a": {"b": {MARKER: 1}}}

        assert _tree.flatten(tree, "::") == {"a::b": 1}

    def test_empty_nested_dict_kept_as_leaf(self) -> None:
        assert _tree.flatten({"a": {}, "b": {"c": {}}}) == {"a": {}, "b.c": {}}

    def test_empty_tree(self) -> None:
        assert _tree.flatten({}) == {}

    def test_lists_are_leaves(self) -> None:
        assert _tree.flatten({"a": {"l": [1, {"x": 2}]}}) == {"a.l": [1, {"x": 2}]}

    def test_prefix_applied(self) -> None:
        assert _tree.flatten({"a": {MARKER: 1, "b": 2}}, ".", "root.") == {
            "root.a": 1,
            "root.a.b": 2,
        }

    def test_top_level_marker_keeps_its_key(self) -> None:
        assert _tree.flatten({MARKER: 1, "b": 2}) == {MARKER: 1, "b": 2}

    def test_duplicate_flat_key_raises(self) -> None:
        """A literal dotted key next to the same nested path is a conflict."""
        with _pytest.raises(errors.MergeConflictError) as exc_info:
            _tree.flatten({"a.b": 1, "a": {"b": 2}})

        assert exc_info.value.key == "a.b"


class TestNextIndex:
    """next_index() picks the list-append key of a dict."""

    def test_empty(self) -> None:
        assert _tree.next_index({}) == "0"

    def test_after_highest_integer_key(self) -> None:
        assert _tree.next_index({"0": "a", "7": "b", "name": "c"}) == "8"

    def test_ignores_non_integer_keys(self) -> None:
        assert _tree.next_index({"name": 1, "-1": 2, "1.5": 3}) == "0"
