"""
Selection model and manager.
"""
from .selection import ALL, Selection, create_selection, selection_to_set
from .state import (
    SelectionState,
    SelectionMode,
    DisabledBehavior,
    SelectionBehavior,
    FocusStrategy,
    SelectedKeys,
)
from .selection_manager import SelectionManager

__all__ = [
    "ALL",
    "Selection",
    "create_selection",
    "selection_to_set",
    "SelectionState",
    "SelectionMode",
    "DisabledBehavior",
    "SelectionBehavior",
    "FocusStrategy",
    "SelectedKeys",
    "SelectionManager",
]
