from typing import Optional

from collectionkit.collection.models import Key
from .delegate import KeyboardDelegate


class ListKeyboardDelegate(KeyboardDelegate):
    """Single column navigation: up/down walk the ordered keys."""

    def get_key_below(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index + 1, 1)

    def get_key_above(self, key: Key) -> Optional[Key]:
        index = self.collection.index_of(key)
        if index == -1:
            return None
        return self._skip_disabled(index - 1, -1)
