"""
Virtualizer - viewport windowing over layout rows.

Rows are disjoint and sorted by y_start, so the visible range is found
with two binary searches and then widened by an overscan row count.
"""
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from collectionkit.collection.models import Key, RowInfo


@dataclass(frozen=True)
class VirtualWindow:
    """Contiguous slice of rows to render. Indices are inclusive; -1 when empty."""
    first_index: int = -1
    last_index: int = -1
    rows: List[RowInfo] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def keys(self) -> List[Key]:
        return [key for row in self.rows for key in row.item_keys]


def compute_virtual_window(
    rows: Sequence[RowInfo],
    scroll_top: float,
    viewport_height: float,
    overscan: int = 0,
) -> VirtualWindow:
    """
    Rows intersecting ``[scroll_top, scroll_top + viewport_height]``, plus overscan.

    Args:
        rows: Rows ordered by y_start
        scroll_top: Current scroll offset
        viewport_height: Visible height; zero or less yields an empty window
        overscan: Extra rows rendered on each side

    Returns:
        VirtualWindow (empty for no rows or an empty viewport)
    """
    if not rows or viewport_height <= 0:
        return VirtualWindow()

    viewport_end = scroll_top + viewport_height
    # First row whose bottom reaches the viewport top
    first = bisect_left(rows, scroll_top, key=lambda row: row.y_start + row.height)
    # Last row starting at or before the viewport bottom
    last = bisect_right(rows, viewport_end, key=lambda row: row.y_start) - 1

    overscan = max(0, overscan)
    start = max(0, first - overscan)
    end = min(len(rows) - 1, last + overscan)
    if start > end:
        return VirtualWindow()
    return VirtualWindow(start, end, list(rows[start:end + 1]))


class Virtualizer:
    """
    Stateful windowing helper for one set of rows.

    Example:
        virtualizer = Virtualizer(layout.get_rows(), overscan=5)
        window = virtualizer.get_window(scroll_top=1200, viewport_height=600)
        new_top = virtualizer.scroll_to_key("k42", scroll_top=1200, viewport_height=600)
    """

    def __init__(self, rows: Sequence[RowInfo] = (), overscan: int = 5):
        self.overscan = overscan
        self.set_rows(rows)

    def set_rows(self, rows: Sequence[RowInfo]):
        self._rows = list(rows)
        self._key_to_row: Dict[Key, int] = {}
        for position, row in enumerate(self._rows):
            for key in row.item_keys:
                self._key_to_row[key] = position

    @property
    def rows(self) -> List[RowInfo]:
        return list(self._rows)

    @property
    def total_height(self) -> float:
        if not self._rows:
            return 0.0
        return self._rows[-1].y_end

    def row_for_key(self, key: Key) -> Optional[RowInfo]:
        position = self._key_to_row.get(key)
        return self._rows[position] if position is not None else None

    def get_window(self, scroll_top: float, viewport_height: float) -> VirtualWindow:
        return compute_virtual_window(self._rows, scroll_top, viewport_height, self.overscan)

    def scroll_to_key(self, key: Key, scroll_top: float, viewport_height: float) -> Optional[float]:
        """
        Minimal scroll offset that brings key's row into view.

        Returns:
            New scroll top, or None when the row is already fully visible
            or the key is unknown
        """
        row = self.row_for_key(key)
        if row is None:
            return None
        if row.y_start < scroll_top:
            return row.y_start
        if row.y_end > scroll_top + viewport_height:
            return max(0.0, row.y_end - viewport_height)
        return None
