"""
Keyboard delegate contract.

A delegate maps a key plus a direction onto the neighbouring key, using
only the ordered collection and the disabled-key set. Layout specific
subclasses decide what "below" or "left of" means.
"""
from abc import ABC, abstractmethod
from typing import AbstractSet, Optional

from collectionkit.collection.models import Key, ListCollection


class KeyboardDelegate(ABC):
    """
    Base class for arrow-key navigation.

    Provides the shared skip-disabled walk, first/last key lookup and
    type-ahead search. Subclasses implement the four directions.
    """

    def __init__(self, collection: ListCollection, disabled_keys: AbstractSet[Key] = frozenset()):
        self.collection = collection
        self.disabled_keys = disabled_keys

    # --- Directions ---

    @abstractmethod
    def get_key_below(self, key: Key) -> Optional[Key]:
        ...

    @abstractmethod
    def get_key_above(self, key: Key) -> Optional[Key]:
        ...

    def get_key_left_of(self, key: Key) -> Optional[Key]:
        return None

    def get_key_right_of(self, key: Key) -> Optional[Key]:
        return None

    def get_key_page_below(self, key: Key, page_size: int) -> Optional[Key]:
        """Up to page_size steps below key; None when nothing lies below."""
        return self._walk(key, page_size, self.get_key_below)

    def get_key_page_above(self, key: Key, page_size: int) -> Optional[Key]:
        return self._walk(key, page_size, self.get_key_above)

    # --- Boundaries ---

    def get_first_key(self) -> Optional[Key]:
        return self._skip_disabled(0, 1)

    def get_last_key(self) -> Optional[Key]:
        return self._skip_disabled(len(self.collection) - 1, -1)

    # --- Type-ahead ---

    def get_key_for_search(self, search: str, from_key: Optional[Key] = None) -> Optional[Key]:
        """
        Find the next key whose text starts with search (case-insensitive).

        Scans forward from just after from_key to the end, then wraps to the
        start. Disabled keys are skipped.
        """
        needle = search.lower()
        keys = self.collection.get_keys()

        start = 0
        if from_key is not None:
            index = self.collection.index_of(from_key)
            if index != -1:
                start = index + 1

        for i in list(range(start, len(keys))) + list(range(0, start)):
            key = keys[i]
            if self.is_disabled(key):
                continue
            node = self.collection.get_item(key)
            text = node.text_value if node else None
            if text is not None and text.lower().startswith(needle):
                return key
        return None

    # --- Helpers ---

    def is_disabled(self, key: Key) -> bool:
        return key in self.disabled_keys

    def _walk(self, key: Key, steps: int, move) -> Optional[Key]:
        target = None
        for _ in range(max(steps, 1)):
            next_key = move(key)
            if next_key is None:
                break
            target = key = next_key
        return target

    def _skip_disabled(self, index: int, step: int) -> Optional[Key]:
        """First enabled key at or after index, walking by step."""
        keys = self.collection.get_keys()
        while 0 <= index < len(keys):
            if not self.is_disabled(keys[index]):
                return keys[index]
            index += step
        return None
