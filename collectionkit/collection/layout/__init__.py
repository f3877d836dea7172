"""
Layout and virtualization engine.
"""
from .base import (
    Layout,
    LayoutKind,
    MeasurementMode,
    MeasurementInfo,
    MeasurementError,
)
from .list_layout import ListLayout
from .grid_layout import GridLayout, column_count_for_width
from .inline_grid_layout import InlineGridLayout
from .factory import AnyLayout, create_layout
from .virtualizer import Virtualizer, VirtualWindow, compute_virtual_window
from .measurement import MeasurementCoordinator, WIDTH_CHANGE_THRESHOLD

__all__ = [
    "Layout",
    "LayoutKind",
    "MeasurementMode",
    "MeasurementInfo",
    "MeasurementError",
    "ListLayout",
    "GridLayout",
    "column_count_for_width",
    "InlineGridLayout",
    "AnyLayout",
    "create_layout",
    "Virtualizer",
    "VirtualWindow",
    "compute_virtual_window",
    "MeasurementCoordinator",
    "WIDTH_CHANGE_THRESHOLD",
]
