"""
Keyboard navigation delegates and key dispatch.
"""
from .delegate import KeyboardDelegate
from .list_delegate import ListKeyboardDelegate
from .grid_delegate import GridKeyboardDelegate
from .spatial_delegate import (
    SpatialKeyboardDelegate,
    RectProvider,
    DEFAULT_VERTICAL_BIAS,
    is_on_same_row,
)
from .selectable_collection import SelectableCollection, KeyEvent

__all__ = [
    "KeyboardDelegate",
    "ListKeyboardDelegate",
    "GridKeyboardDelegate",
    "SpatialKeyboardDelegate",
    "RectProvider",
    "DEFAULT_VERTICAL_BIAS",
    "is_on_same_row",
    "SelectableCollection",
    "KeyEvent",
]
