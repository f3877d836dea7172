"""
Layout - Abstract positioning strategy for a collection.

A layout turns the ordered collection plus a container width (and, once
known, per-item measurements) into item rectangles and rows. Rows feed
the virtualizer; rectangles feed spatial keyboard navigation.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Dict, List, Mapping, Optional

from collectionkit.collection.models import (
    Key,
    LayoutInfo,
    ListCollection,
    Measurement,
    Rect,
    RowInfo,
    Size,
)


class LayoutKind(str, Enum):
    """Closed set of layout strategies."""
    LIST = "list"
    GRID = "grid"
    INLINE_GRID = "inline_grid"


class MeasurementMode(str, Enum):
    """What the renderer must measure for each item."""
    NONE = "none"
    HEIGHT_ONLY = "height"
    INTRINSIC = "intrinsic"


@dataclass(frozen=True)
class MeasurementInfo:
    mode: MeasurementMode
    constrained_width: Optional[float] = None


class MeasurementError(ValueError):
    """An item reported a degenerate intrinsic size."""


class Layout(ABC):
    """
    Base class for all layout strategies.

    Subclasses implement ``update`` and ``get_keyboard_delegate``; the base
    class keeps the computed rects, rows and content size.

    Lifecycle:
        layout.set_items(collection)
        layout.update(container_width)          # first paint, approximate
        layout.update_with_measurements(sizes)  # exact rows once measured
    """

    kind: LayoutKind

    def __init__(self):
        self.collection = ListCollection()
        self.container_width = 0.0
        self._layout_infos: Dict[Key, LayoutInfo] = {}
        self._rows: List[RowInfo] = []
        self._content_size = Size()

    # --- Inputs ---

    def set_items(self, collection: ListCollection):
        """Adopt a new collection snapshot. Takes effect on the next update."""
        self.collection = collection

    @abstractmethod
    def update(self, container_width: float):
        """Recompute positions for the given container width."""

    @abstractmethod
    def update_with_measurements(self, measurements: Mapping[Key, Measurement]):
        """Apply measured item sizes and recompute rows."""

    def invalidate_measurements(self):
        """Forget all measured sizes; the next pass starts from scratch."""

    # --- Queries ---

    def get_layout_info(self, key: Key) -> Optional[LayoutInfo]:
        """Rect for key, or None before the first successful update."""
        return self._layout_infos.get(key)

    def get_item_rect(self, key: Key) -> Optional[Rect]:
        info = self._layout_infos.get(key)
        return info.rect if info else None

    def get_rows(self) -> List[RowInfo]:
        return list(self._rows)

    def get_content_size(self) -> Size:
        return self._content_size

    def get_gap(self) -> float:
        return 0.0

    def get_measurement_info(self, container_width: Optional[float] = None) -> MeasurementInfo:
        return MeasurementInfo(MeasurementMode.NONE)

    @abstractmethod
    def get_keyboard_delegate(
        self,
        collection: ListCollection,
        disabled_keys: AbstractSet[Key] = frozenset(),
        container_width: Optional[float] = None,
    ):
        """Navigation delegate matching this layout's geometry."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(items={self.collection.size}, width={self.container_width})"


def measured_height(measurement: Measurement) -> float:
    if isinstance(measurement, Size):
        return float(measurement.height)
    return float(measurement)
