"""
Selection value type.

An immutable set of keys that also remembers the anchor and current keys
of the most recent range operation. Every mutator returns a new Selection,
so a consumer holding an older value never observes later changes.
"""
from collections.abc import Set
from typing import AbstractSet, Iterable, Iterator, Optional, Union

from collectionkit.collection.models import Key

# Compact marker meaning "every currently selectable key"
ALL = "all"


class Selection(Set):
    """
    Immutable selection set with anchor/current range tracking.

    The anchor and current keys mark the endpoints of the last range
    gesture (e.g. shift+arrow). They need not be selected themselves.

    Example:
        sel = Selection(["a", "b"])
        sel = sel.add_key("c")        # {"a", "b", "c"}, anchor=current="c"
        sel = sel.toggle_key("a")     # {"b", "c"}, anchor=current="a"
    """

    __slots__ = ("_keys", "_anchor_key", "_current_key")

    def __init__(
        self,
        keys: Iterable[Key] = (),
        anchor_key: Optional[Key] = None,
        current_key: Optional[Key] = None,
    ):
        # Copying another Selection inherits its range unless overridden
        if isinstance(keys, Selection):
            anchor_key = keys.anchor_key if anchor_key is None else anchor_key
            current_key = keys.current_key if current_key is None else current_key
        self._keys = frozenset(keys)
        self._anchor_key = anchor_key
        self._current_key = current_key

    # --- Set protocol ---

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[Key]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __hash__(self) -> int:
        return hash(self._keys)

    @classmethod
    def _from_iterable(cls, it: Iterable[Key]) -> "Selection":
        return cls(frozenset(it))

    # --- Range endpoints ---

    @property
    def anchor_key(self) -> Optional[Key]:
        return self._anchor_key

    @property
    def current_key(self) -> Optional[Key]:
        return self._current_key

    @property
    def size(self) -> int:
        return len(self._keys)

    # --- Transformations ---

    def clone(self) -> "Selection":
        return Selection(self._keys, self._anchor_key, self._current_key)

    def with_range(self, anchor_key: Optional[Key], current_key: Optional[Key]) -> "Selection":
        """Same keys, new range endpoints."""
        return Selection(self._keys, anchor_key, current_key)

    def add_key(self, key: Key) -> "Selection":
        return Selection(self._keys | {key}, key, key)

    def delete_key(self, key: Key) -> "Selection":
        return Selection(self._keys - {key}, self._anchor_key, self._current_key)

    def toggle_key(self, key: Key) -> "Selection":
        """Add or remove key; the range collapses onto it either way."""
        if key in self._keys:
            return Selection(self._keys - {key}, key, key)
        return Selection(self._keys | {key}, key, key)

    def replace_with(self, key: Key) -> "Selection":
        return Selection((key,), key, key)

    def union_keys(self, keys: Iterable[Key]) -> "Selection":
        return Selection(self._keys.union(keys), self._anchor_key, self._current_key)

    def difference_keys(self, keys: Iterable[Key]) -> "Selection":
        return Selection(self._keys.difference(keys), self._anchor_key, self._current_key)

    def clear_all(self) -> "Selection":
        return Selection()

    def __repr__(self) -> str:
        keys = sorted(self._keys, key=repr)
        return f"Selection({keys!r}, anchor_key={self._anchor_key!r}, current_key={self._current_key!r})"


def create_selection(
    keys: Iterable[Key] = (),
    anchor_key: Optional[Key] = None,
    current_key: Optional[Key] = None,
) -> Selection:
    return Selection(keys, anchor_key, current_key)


def selection_to_set(selection: Union[Selection, AbstractSet[Key], str]) -> Union[set, str]:
    """Plain set copy of a selection; the 'all' marker passes through."""
    if isinstance(selection, str):
        return ALL
    return set(selection)

