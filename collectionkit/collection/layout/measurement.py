"""
Measurement coordination.

Decides when a layout needs a full re-measurement pass and feeds
measured sizes back into it.
"""
from typing import Callable, Collection, Mapping, Optional

from loguru import logger

from collectionkit.collection.models import Key, Measurement, Size
from .base import Layout, MeasurementError, MeasurementMode

# Width jitter below this (e.g. a scrollbar appearing) is ignored
WIDTH_CHANGE_THRESHOLD = 10.0


class MeasurementCoordinator:
    """
    Tracks the width and scale a layout was last measured at.

    A width change beyond the threshold (height-only layouts) or any change
    of the scale probe value forces ``invalidate_measurements`` and a full
    pass; smaller width changes only re-run ``update``.

    Args:
        layout: Layout receiving the measurements
        scale_probe: Returns the current base text/metric scale (e.g. the
            measured size of a sentinel element)
        width_change_threshold: Width delta that counts as a real resize
    """

    def __init__(
        self,
        layout: Layout,
        scale_probe: Optional[Callable[[], float]] = None,
        width_change_threshold: float = WIDTH_CHANGE_THRESHOLD,
    ):
        self.layout = layout
        self.scale_probe = scale_probe
        self.width_change_threshold = width_change_threshold
        self._measured_width: Optional[float] = None
        self._measured_scale: Optional[float] = None
        self._measured_keys: set = set()
        self._expected_keys: set = set()

    @property
    def is_complete(self) -> bool:
        return bool(self._expected_keys) and self._expected_keys <= self._measured_keys

    @property
    def mode(self) -> MeasurementMode:
        return self.layout.get_measurement_info().mode

    def expect(self, keys: Collection[Key]):
        """Keys that must be measured before the layout counts as complete."""
        self._expected_keys = set(keys)
        self._measured_keys &= self._expected_keys

    def needs_remeasurement(self, container_width: float) -> bool:
        if self.mode == MeasurementMode.NONE:
            return False
        if self._measured_width is None:
            return True
        if self.scale_probe is not None and self.scale_probe() != self._measured_scale:
            return True
        if self.mode == MeasurementMode.HEIGHT_ONLY:
            return abs(container_width - self._measured_width) > self.width_change_threshold
        return False

    def on_container_resize(self, container_width: float) -> bool:
        """
        Re-layout for a new width.

        Returns:
            True when a full re-measurement pass is now required
        """
        remeasure = self.needs_remeasurement(container_width)
        if remeasure and self._measured_width is not None:
            logger.debug(f"MeasurementCoordinator: invalidating measurements at width {container_width}")
            self.layout.invalidate_measurements()
            self._measured_keys.clear()
        self.layout.update(container_width)
        return remeasure

    def apply(self, measurements: Mapping[Key, Measurement]):
        """Validate and push measurements into the layout."""
        if self.mode == MeasurementMode.INTRINSIC:
            # A zero in either dimension is invalid
            for key, measurement in measurements.items():
                if isinstance(measurement, Size) and (measurement.width == 0 or measurement.height == 0):
                    raise MeasurementError(
                        f"Item {key!r} measured to {measurement.width}x{measurement.height}"
                    )
        self.layout.update_with_measurements(measurements)
        self._measured_keys.update(measurements.keys())
        self._measured_width = self.layout.container_width
        if self.scale_probe is not None:
            self._measured_scale = self.scale_probe()

    def reset(self):
        """Forget everything (e.g. the collection changed)."""
        self.layout.invalidate_measurements()
        self._measured_keys.clear()
        self._measured_width = None
        self._measured_scale = None
