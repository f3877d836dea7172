from typing import AbstractSet, Dict, Mapping, Optional, Union

from loguru import logger

from collectionkit.collection.keyboard import ListKeyboardDelegate
from collectionkit.collection.models import (
    Key,
    LayoutInfo,
    ListCollection,
    Measurement,
    Padding,
    Rect,
    RowInfo,
    Size,
)
from .base import Layout, LayoutKind, MeasurementInfo, MeasurementMode, measured_height


class ListLayout(Layout):
    """
    Single column layout.

    Every item spans the padded container width; each item is its own row.
    Heights start at zero and are filled in by measurements.

    Example:
        layout = ListLayout(gap=8, padding=16)
        layout.set_items(collection)
        layout.update(400)
        layout.update_with_measurements({"a": 40, "b": 56})
    """

    kind = LayoutKind.LIST

    def __init__(self, gap: float = 0, padding: Union[float, Padding, None] = 0):
        super().__init__()
        self._gap = gap
        self._padding = Padding.of(padding)
        self._heights: Dict[Key, float] = {}

    def get_gap(self) -> float:
        return self._gap

    def get_padding(self) -> Padding:
        return self._padding

    def get_measurement_info(self, container_width: Optional[float] = None) -> MeasurementInfo:
        width = self.container_width if container_width is None else container_width
        inner = max(0.0, width - self._padding.left - self._padding.right)
        return MeasurementInfo(MeasurementMode.HEIGHT_ONLY, constrained_width=inner)

    def update(self, container_width: float):
        self.container_width = container_width
        self._recalculate()

    def update_with_measurements(self, measurements: Mapping[Key, Measurement]):
        for key, measurement in measurements.items():
            self._heights[key] = measured_height(measurement)
        self._recalculate()

    def invalidate_measurements(self):
        self._heights.clear()

    def _recalculate(self):
        pad = self._padding
        width = max(0.0, self.container_width - pad.left - pad.right)
        infos = {}
        rows = []
        y = pad.top

        for index, key in enumerate(self.collection.get_keys()):
            if index > 0:
                y += self._gap
            height = self._heights.get(key, 0.0)
            infos[key] = LayoutInfo(key, Rect(pad.left, y, width, height))
            rows.append(RowInfo(row_index=index, y_start=y, height=height, item_keys=[key]))
            y += height

        self._layout_infos = infos
        self._rows = rows
        content_height = y + pad.bottom if rows else 0.0
        self._content_size = Size(self.container_width, content_height)
        logger.debug(f"ListLayout: {len(rows)} rows, content height {content_height}")

    def get_keyboard_delegate(
        self,
        collection: ListCollection,
        disabled_keys: AbstractSet[Key] = frozenset(),
        container_width: Optional[float] = None,
    ) -> ListKeyboardDelegate:
        return ListKeyboardDelegate(collection, disabled_keys)
