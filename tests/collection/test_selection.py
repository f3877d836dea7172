"""
Tests for the immutable Selection value type.
"""
from collectionkit.collection.selection import (
    ALL,
    Selection,
    create_selection,
    selection_to_set,
)


class TestSelectionConstruction:
    """Tests for building selections."""

    def test_empty(self):
        sel = Selection()
        assert len(sel) == 0
        assert sel.anchor_key is None
        assert sel.current_key is None

    def test_from_keys_has_no_range(self):
        sel = Selection(["a", "b", "c"])
        assert sel == {"a", "b", "c"}
        assert sel.anchor_key is None
        assert sel.current_key is None

    def test_explicit_range(self):
        sel = Selection(["a", "b", "c"], "a", "c")
        assert sel.anchor_key == "a"
        assert sel.current_key == "c"

    def test_copy_inherits_range(self):
        original = Selection(["a", "b"], "a", "b")
        copy = Selection(original)
        assert copy == original
        assert copy.anchor_key == "a"
        assert copy.current_key == "b"

    def test_copy_can_override_range(self):
        copy = Selection(Selection(["a", "b"], "a", "b"), "x", "y")
        assert copy.anchor_key == "x"
        assert copy.current_key == "y"

    def test_helpers(self):
        sel = create_selection([1, 2], 1, 2)
        assert sel.anchor_key == 1
        assert selection_to_set(sel) == {1, 2}
        assert isinstance(selection_to_set(sel), set)
        assert selection_to_set(ALL) == ALL


class TestSelectionTransformations:
    """Every mutator returns a new Selection and leaves the old one alone."""

    def test_add_key(self):
        original = Selection(["a"])
        updated = original.add_key("b")
        assert updated == {"a", "b"}
        assert updated.anchor_key == "b"
        assert updated.current_key == "b"
        assert "b" not in original

    def test_delete_key_keeps_range(self):
        original = Selection(["a", "b", "c"], "a", "c")
        updated = original.delete_key("b")
        assert updated == {"a", "c"}
        assert updated.anchor_key == "a"
        assert "b" in original

    def test_toggle_key(self):
        sel = Selection(["a"])
        assert "b" in sel.toggle_key("b")
        assert "a" not in sel.toggle_key("a")

    def test_toggle_round_trip(self):
        sel = Selection(["a", "c"], "a", "c")
        for key in ("a", "b", "z"):
            once = sel.toggle_key(key)
            twice = once.toggle_key(key)
            assert twice == sel
            assert once.anchor_key == once.current_key == key
            assert twice.anchor_key == twice.current_key == key

    def test_replace_with(self):
        updated = Selection(["a", "b", "c"]).replace_with("x")
        assert updated == {"x"}
        assert updated.anchor_key == "x"
        assert updated.current_key == "x"

    def test_with_range(self):
        updated = Selection(["a", "b"], "a", "b").with_range("x", "y")
        assert updated == {"a", "b"}
        assert (updated.anchor_key, updated.current_key) == ("x", "y")

    def test_clear_all(self):
        cleared = Selection(["a", "b"], "a", "b").clear_all()
        assert len(cleared) == 0
        assert cleared.anchor_key is None
        assert cleared.current_key is None

    def test_clone_is_equal_and_independent(self):
        original = Selection(["a"], "a", "a")
        cloned = original.clone()
        grown = cloned.add_key("b")
        assert cloned == original
        assert "b" not in original
        assert "b" in grown

    def test_set_algebra_and_hash(self):
        sel = Selection(["a", "b"])
        assert sel | {"c"} == {"a", "b", "c"}
        assert isinstance(sel & {"a"}, Selection)
        assert hash(sel) == hash(frozenset({"a", "b"}))
        assert sel == frozenset({"a", "b"})
