"""
Selection state snapshot.

State objects are frozen and replaced wholesale, so readers always see a
consistent snapshot.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Union

from collectionkit.collection.models import Key
from .selection import Selection


class SelectionMode(str, Enum):
    """How many items can be selected."""
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


class DisabledBehavior(str, Enum):
    """Whether disabled keys block selection only, or focus too."""
    SELECTION = "selection"
    ALL = "all"


class SelectionBehavior(str, Enum):
    TOGGLE = "toggle"
    REPLACE = "replace"


class FocusStrategy(str, Enum):
    """Which child receives focus when focus enters nested content."""
    FIRST = "first"
    LAST = "last"


SelectedKeys = Union[Selection, str]


@dataclass(frozen=True)
class SelectionState:
    """
    Snapshot of selection and focus for one collection.

    Attributes:
        selection_mode: none, single or multiple
        selected_keys: Selection, or the "all" marker
        focused_key: Key holding keyboard focus
        is_focused: Whether the collection itself has focus
        child_focus_strategy: Hint for focus entering nested content
        disabled_keys: Keys that cannot be selected
        disabled_behavior: Whether disabled keys also refuse focus
        selection_behavior: toggle or replace on plain activation
        disallow_empty_selection: Refuse operations that would empty the selection
    """
    selection_mode: SelectionMode = SelectionMode.NONE
    selected_keys: SelectedKeys = field(default_factory=Selection)
    focused_key: Optional[Key] = None
    is_focused: bool = False
    child_focus_strategy: Optional[FocusStrategy] = None
    disabled_keys: FrozenSet[Key] = frozenset()
    disabled_behavior: DisabledBehavior = DisabledBehavior.SELECTION
    selection_behavior: SelectionBehavior = SelectionBehavior.TOGGLE
    disallow_empty_selection: bool = False

    @property
    def is_select_all(self) -> bool:
        return isinstance(self.selected_keys, str)
