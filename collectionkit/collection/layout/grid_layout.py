import math
from typing import AbstractSet, Dict, Mapping, Optional, Union

from loguru import logger

from collectionkit.collection.keyboard import GridKeyboardDelegate
from collectionkit.collection.models import (
    Key,
    LayoutInfo,
    ListCollection,
    Measurement,
    Rect,
    RowInfo,
    Size,
)
from .base import Layout, LayoutKind, MeasurementInfo, MeasurementMode, measured_height

AUTO = "auto"


def column_count_for_width(container_width: float, min_item_width: float, gap: float) -> int:
    """How many min-width columns fit, never less than one."""
    if min_item_width + gap <= 0:
        return 1
    return max(1, math.floor((container_width + gap) / (min_item_width + gap)))


class GridLayout(Layout):
    """
    Fixed or auto column grid.

    Items fill rows left to right. Row height is the tallest member; until
    measurements arrive every height is zero so positions are available
    for the first paint.

    Args:
        columns: Column count, or "auto" to derive it from the container width
        min_item_width: Minimum column width used by "auto"
        gap: Horizontal and vertical spacing

    Example:
        layout = GridLayout(columns="auto", min_item_width=180, gap=12)
    """

    kind = LayoutKind.GRID

    def __init__(self, columns: Union[int, str] = AUTO, min_item_width: float = 200, gap: float = 16):
        super().__init__()
        self._columns_option = columns
        self._min_item_width = min_item_width
        self._gap = gap
        self._columns = 1 if columns == AUTO else max(1, int(columns or 1))
        self._item_width = 0.0
        self._heights: Dict[Key, float] = {}

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def is_auto(self) -> bool:
        return self._columns_option == AUTO

    @property
    def item_width(self) -> float:
        return self._item_width

    def get_gap(self) -> float:
        return self._gap

    def column_count(self, container_width: Optional[float] = None) -> int:
        """Columns for a width; falls back to the current count when width is unknown."""
        if not self.is_auto:
            return self._columns
        if not container_width or container_width <= 0:
            return self._columns
        return column_count_for_width(container_width, self._min_item_width, self._gap)

    def get_measurement_info(self, container_width: Optional[float] = None) -> MeasurementInfo:
        width = self.container_width if container_width is None else container_width
        columns = self.column_count(width)
        return MeasurementInfo(MeasurementMode.HEIGHT_ONLY, constrained_width=self._width_for(width, columns))

    def update(self, container_width: float):
        self.container_width = container_width
        self._columns = self.column_count(container_width)
        self._item_width = self._width_for(container_width, self._columns)
        self._recalculate()

    def update_with_measurements(self, measurements: Mapping[Key, Measurement]):
        for key, measurement in measurements.items():
            self._heights[key] = measured_height(measurement)
        self._recalculate()

    def invalidate_measurements(self):
        self._heights.clear()

    def _width_for(self, container_width: float, columns: int) -> float:
        return max(0.0, (container_width - self._gap * (columns - 1)) / columns)

    def _recalculate(self):
        keys = self.collection.get_keys()
        columns = self._columns
        infos = {}
        rows = []
        y = 0.0

        for row_index, start in enumerate(range(0, len(keys), columns)):
            if row_index > 0:
                y += self._gap
            row_keys = list(keys[start:start + columns])
            row_height = max(self._heights.get(key, 0.0) for key in row_keys)
            for column, key in enumerate(row_keys):
                x = column * (self._item_width + self._gap)
                height = self._heights.get(key, 0.0)
                infos[key] = LayoutInfo(key, Rect(x, y, self._item_width, height))
            rows.append(RowInfo(row_index=row_index, y_start=y, height=row_height, item_keys=row_keys))
            y += row_height

        self._layout_infos = infos
        self._rows = rows
        self._content_size = Size(self.container_width, y)
        logger.debug(f"GridLayout: {columns} columns, {len(rows)} rows, content height {y}")

    def get_keyboard_delegate(
        self,
        collection: ListCollection,
        disabled_keys: AbstractSet[Key] = frozenset(),
        container_width: Optional[float] = None,
    ) -> GridKeyboardDelegate:
        return GridKeyboardDelegate(collection, self.column_count(container_width), disabled_keys)
