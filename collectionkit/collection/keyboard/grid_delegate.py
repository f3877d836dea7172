from typing import AbstractSet, Optional

from collectionkit.collection.models import Key, ListCollection
from .delegate import KeyboardDelegate


class GridKeyboardDelegate(KeyboardDelegate):
    """
    Fixed column navigation.

    Items fill rows left to right, so vertical moves jump by the column
    count and horizontal moves step by one.

    Example:
        delegate = GridKeyboardDelegate(collection, columns=3)
        delegate.get_key_below("a")   # key three positions later
    """

    def __init__(
        self,
        collection: ListCollection,
        columns: int = 1,
        disabled_keys: AbstractSet[Key] = frozenset(),
    ):
        super().__init__(collection, disabled_keys)
        self.columns = max(1, int(columns or 1))

    def get_key_below(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index + self.columns, 1)

    def get_key_above(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index - self.columns, -1)

    def get_key_left_of(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index - 1, -1)

    def get_key_right_of(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index + 1, 1)
