from typing import AbstractSet, Dict, Mapping, Optional

from loguru import logger

from collectionkit.collection.keyboard import SpatialKeyboardDelegate
from collectionkit.collection.keyboard.spatial_delegate import DEFAULT_VERTICAL_BIAS, RectProvider
from collectionkit.collection.models import (
    Key,
    LayoutInfo,
    ListCollection,
    Measurement,
    Rect,
    RowInfo,
    Size,
)
from .base import Layout, LayoutKind, MeasurementError, MeasurementInfo, MeasurementMode
from .grid_layout import column_count_for_width


class InlineGridLayout(Layout):
    """
    Wrapping flow layout for items with their own intrinsic size.

    Items are placed left to right and wrap when the next one would
    overflow the container. Before measurements arrive every item uses
    the placeholder size and no rows are reported.

    Keyboard navigation is spatial, driven by the rects this layout
    computed (or by rects supplied from the rendering layer).
    """

    kind = LayoutKind.INLINE_GRID

    def __init__(
        self,
        gap: float = 16,
        item_width: float = 100,
        item_height: float = 50,
        rect_provider: Optional[RectProvider] = None,
        vertical_bias: float = DEFAULT_VERTICAL_BIAS,
    ):
        super().__init__()
        self._gap = gap
        self._placeholder = Size(item_width, item_height)
        self._rect_provider = rect_provider
        self._vertical_bias = vertical_bias
        self._sizes: Dict[Key, Size] = {}

    def get_gap(self) -> float:
        return self._gap

    @property
    def has_measurements(self) -> bool:
        return bool(self._sizes)

    def column_count(self, container_width: Optional[float] = None) -> int:
        """Nominal columns of placeholder-width items; rows may differ in practice."""
        width = self.container_width if container_width is None else container_width
        return column_count_for_width(width or 0, self._placeholder.width, self._gap)

    def get_measurement_info(self, container_width: Optional[float] = None) -> MeasurementInfo:
        return MeasurementInfo(MeasurementMode.INTRINSIC)

    def update(self, container_width: float):
        self.container_width = container_width
        if self._sizes:
            self._recalculate()
            return

        # Approximate pass with placeholder sizes
        infos = {}
        x = y = 0.0
        for key in self.collection.get_keys():
            size = self._placeholder
            if x > 0 and x + size.width > container_width:
                x = 0.0
                y += size.height + self._gap
            infos[key] = LayoutInfo(key, Rect(x, y, size.width, size.height))
            x += size.width + self._gap

        self._layout_infos = infos
        self._rows = []
        height = y + self._placeholder.height if infos else 0.0
        self._content_size = Size(container_width, height)

    def update_with_measurements(self, measurements: Mapping[Key, Measurement]):
        validated = {}
        for key, measurement in measurements.items():
            if isinstance(measurement, Size):
                # Either dimension at zero is rejected, not only both
                if measurement.width == 0 or measurement.height == 0:
                    raise MeasurementError(
                        f"InlineGridLayout: item {key!r} measured to "
                        f"{measurement.width}x{measurement.height}; items need a non-zero intrinsic size"
                    )
                validated[key] = measurement
            else:
                # Height-only measurement: assume the full container width
                validated[key] = Size(self.container_width, float(measurement))
        self._sizes.update(validated)
        self._recalculate()

    def invalidate_measurements(self):
        self._sizes.clear()

    def _recalculate(self):
        infos = {}
        rows = []
        x = y = 0.0
        row_keys = []
        row_height = 0.0

        for key in self.collection.get_keys():
            size = self._sizes.get(key)
            if size is None:
                continue
            if x > 0 and x + size.width > self.container_width:
                rows.append(RowInfo(row_index=len(rows), y_start=y, height=row_height, item_keys=row_keys))
                x = 0.0
                y += row_height + self._gap
                row_keys = []
                row_height = 0.0
            infos[key] = LayoutInfo(key, Rect(x, y, size.width, size.height))
            row_keys.append(key)
            row_height = max(row_height, size.height)
            x += size.width + self._gap

        if row_keys:
            rows.append(RowInfo(row_index=len(rows), y_start=y, height=row_height, item_keys=row_keys))
            y += row_height

        self._layout_infos = infos
        self._rows = rows
        self._content_size = Size(self.container_width, y)
        logger.debug(f"InlineGridLayout: {len(rows)} rows from {len(self._sizes)} measured items")

    def get_keyboard_delegate(
        self,
        collection: ListCollection,
        disabled_keys: AbstractSet[Key] = frozenset(),
        container_width: Optional[float] = None,
    ) -> SpatialKeyboardDelegate:
        provider = self._rect_provider or self.get_item_rect
        return SpatialKeyboardDelegate(collection, provider, disabled_keys, self._vertical_bias)
