"""
Spatial keyboard delegate.

Navigates by on-screen rectangles instead of index arithmetic, for
layouts whose rows hold a varying number of variable-size items.
"""
from typing import AbstractSet, Callable, List, Optional, Tuple

from collectionkit.collection.models import Key, ListCollection, Rect
from .delegate import KeyboardDelegate

RectProvider = Callable[[Key], Optional[Rect]]

DEFAULT_VERTICAL_BIAS = 1000.0


def is_on_same_row(a: Rect, b: Rect) -> bool:
    """Rows match when vertical overlap exceeds half the shorter item's height."""
    overlap = max(0.0, min(a.max_y, b.max_y) - max(a.y, b.y))
    min_height = min(a.height, b.height)
    return min_height > 0 and overlap > min_height * 0.5


class SpatialKeyboardDelegate(KeyboardDelegate):
    """
    Nearest-neighbour navigation over item rectangles.

    Up/Down first find the nearest row in that direction, then pick the
    member minimising ``bias * |dx| + |dy|`` so the cursor stays in its
    visual column. Left/Right pick the closest item on the same row.

    Args:
        collection: Ordered collection snapshot
        get_item_rect: Returns an item's rect, or None if it has none yet
        disabled_keys: Keys that navigation skips
        vertical_bias: Weight of horizontal offset during vertical moves
    """

    def __init__(
        self,
        collection: ListCollection,
        get_item_rect: RectProvider,
        disabled_keys: AbstractSet[Key] = frozenset(),
        vertical_bias: float = DEFAULT_VERTICAL_BIAS,
    ):
        super().__init__(collection, disabled_keys)
        self.get_item_rect = get_item_rect
        self.vertical_bias = vertical_bias

    def _candidates(self, from_key: Key) -> List[Tuple[Key, Rect]]:
        result = []
        for key in self.collection.get_keys():
            if key == from_key or self.is_disabled(key):
                continue
            rect = self.get_item_rect(key)
            if rect is not None:
                result.append((key, rect))
        return result

    def _find_nearest_vertical(self, from_key: Key, downward: bool) -> Optional[Key]:
        source = self.get_item_rect(from_key)
        if source is None:
            return None

        candidates = []
        for key, rect in self._candidates(from_key):
            ahead = rect.center_y > source.center_y if downward else rect.center_y < source.center_y
            if ahead and not is_on_same_row(source, rect):
                candidates.append((key, rect))
        if not candidates:
            return None

        # Restrict to the nearest row in the direction of travel
        _, nearest = min(candidates, key=lambda c: abs(c[1].center_y - source.center_y))
        row = [c for c in candidates if c[1] is nearest or is_on_same_row(nearest, c[1])]

        def distance(candidate):
            rect = candidate[1]
            return (self.vertical_bias * abs(rect.center_x - source.center_x)
                    + abs(rect.center_y - source.center_y))

        return min(row, key=distance)[0]

    def _find_nearest_horizontal(self, from_key: Key, rightward: bool) -> Optional[Key]:
        source = self.get_item_rect(from_key)
        if source is None:
            return None

        best_key = None
        best_distance = float("inf")
        for key, rect in self._candidates(from_key):
            ahead = rect.center_x > source.center_x if rightward else rect.center_x < source.center_x
            if ahead and is_on_same_row(source, rect):
                distance = abs(rect.center_x - source.center_x)
                if distance < best_distance:
                    best_key, best_distance = key, distance
        return best_key

    def get_key_below(self, key: Key) -> Optional[Key]:
        return self._find_nearest_vertical(key, downward=True)

    def get_key_above(self, key: Key) -> Optional[Key]:
        return self._find_nearest_vertical(key, downward=False)

    def get_key_right_of(self, key: Key) -> Optional[Key]:
        return self._find_nearest_horizontal(key, rightward=True)

    def get_key_left_of(self, key: Key) -> Optional[Key]:
        return self._find_nearest_horizontal(key, rightward=False)
