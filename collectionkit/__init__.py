"""
CollectionKit - Non-visual engine for list/grid collections.

Provides the state machinery behind keyboard-navigable, virtualized
collections:
- Selection: immutable selection sets with anchor/current range tracking
- Keyboard: list, grid and spatial navigation delegates with type-ahead
- Layout: list, grid and wrapping inline-grid layouts plus viewport windowing
- Sort/Filter: multi-rule comparators merged with fuzzy-search relevance

Usage:
    from collectionkit import CollectionViewModel, GridLayout

    vm = CollectionViewModel(key_extractor=lambda r: r["id"], layout=GridLayout(columns=3))
    vm.set_items(records)
    vm.toggle_selection("a")
"""
from collectionkit.core.config import CollectionConfig, ConfigManager
from collectionkit.core.events import Signal
from collectionkit.collection.models import (
    Key,
    Node,
    NodeType,
    ListCollection,
    Rect,
    Size,
    RowInfo,
    LayoutInfo,
    SortRule,
    SortDirection,
    SortType,
)
from collectionkit.collection.selection import (
    Selection,
    SelectionState,
    SelectionManager,
    SelectionMode,
)
from collectionkit.collection.keyboard import (
    KeyboardDelegate,
    ListKeyboardDelegate,
    GridKeyboardDelegate,
    SpatialKeyboardDelegate,
    SelectableCollection,
    KeyEvent,
)
from collectionkit.collection.layout import (
    Layout,
    LayoutKind,
    ListLayout,
    GridLayout,
    InlineGridLayout,
    MeasurementError,
    Virtualizer,
    create_layout,
)
from collectionkit.collection.controllers import (
    SortManager,
    FilterManager,
    build_comparator,
    filter_and_sort,
)
from collectionkit.collection.search import FuzzySearchIndex, SearchCoordinator
from collectionkit.collection.store import CollectionStore
from collectionkit.collection.viewmodel import CollectionViewModel

__version__ = "0.1.0"

__all__ = [
    "CollectionConfig",
    "ConfigManager",
    "Signal",
    "Key",
    "Node",
    "NodeType",
    "ListCollection",
    "Rect",
    "Size",
    "RowInfo",
    "LayoutInfo",
    "SortRule",
    "SortDirection",
    "SortType",
    "Selection",
    "SelectionState",
    "SelectionManager",
    "SelectionMode",
    "KeyboardDelegate",
    "ListKeyboardDelegate",
    "GridKeyboardDelegate",
    "SpatialKeyboardDelegate",
    "SelectableCollection",
    "KeyEvent",
    "Layout",
    "LayoutKind",
    "ListLayout",
    "GridLayout",
    "InlineGridLayout",
    "MeasurementError",
    "Virtualizer",
    "create_layout",
    "SortManager",
    "FilterManager",
    "build_comparator",
    "filter_and_sort",
    "FuzzySearchIndex",
    "SearchCoordinator",
    "CollectionStore",
    "CollectionViewModel",
]
