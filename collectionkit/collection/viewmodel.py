"""
CollectionViewModel - public facade for one collection instance.

Wires the store, selection/sort/filter managers, layout, keyboard
dispatch and background search together and exposes their change
notifications as signals.
"""
from typing import Any, Callable, Iterable, List, Optional, Sequence, Set, Union

from loguru import logger

from collectionkit.core.config import CollectionConfig, ConfigManager
from collectionkit.core.events import Signal
from collectionkit.collection.controllers import FilterManager, SortManager
from collectionkit.collection.keyboard import KeyboardDelegate, SelectableCollection
from collectionkit.collection.keyboard.selectable_collection import KeyEvent
from collectionkit.collection.layout import (
    Layout,
    LayoutKind,
    MeasurementCoordinator,
    VirtualWindow,
    Virtualizer,
    create_layout,
)
from collectionkit.collection.models import (
    Key,
    KeyExtractor,
    LayoutInfo,
    ListCollection,
    RowInfo,
    SortDirection,
    SortProperty,
    SortRule,
    SortType,
    TextValueExtractor,
)
from collectionkit.collection.search import FuzzySearchIndex, SearchCoordinator
from collectionkit.collection.selection import (
    DisabledBehavior,
    FocusStrategy,
    Selection,
    SelectionBehavior,
    SelectionManager,
    SelectionMode,
    SelectionState,
)
from collectionkit.collection.store import CollectionStore


class CollectionViewModel:
    """
    ViewModel for a keyboard-navigable, virtualized collection.

    Controls:
    - Record ingestion and the visible (filtered + sorted) key order
    - Selection and focus
    - Sort rules and fuzzy filtering
    - Layout, measurement and viewport windowing

    Signals:
        selectionChanged(keys)
        sortChanged(sort_state)
        filterChanged(query)
        filterResultsChanged(keys, count)
        itemsChanged(collection)
        layoutChanged(layout)

    Example:
        vm = CollectionViewModel(key_extractor=lambda r: r["id"],
                                 text_value_extractor=lambda r: r["name"],
                                 layout=GridLayout(columns=3))
        vm.set_items(records)
        vm.update_layout(900)
        vm.toggle_selection("a")
        vm.sort_by("name")
        vm.set_query("ali")
    """

    def __init__(
        self,
        key_extractor: KeyExtractor,
        text_value_extractor: Optional[TextValueExtractor] = None,
        layout: Union[Layout, LayoutKind, str, None] = None,
        config: Optional[ConfigManager] = None,
        search_index: Optional[FuzzySearchIndex] = None,
        selected_keys: Iterable[Key] = (),
        disabled_keys: Iterable[Key] = (),
        scale_probe: Optional[Callable[[], float]] = None,
    ):
        self.config = config or ConfigManager()
        settings: CollectionConfig = self.config.data

        self.key_extractor = key_extractor
        self.text_value_extractor = text_value_extractor

        # Signals
        self.selectionChanged = Signal("selectionChanged")
        self.sortChanged = Signal("sortChanged")
        self.filterChanged = Signal("filterChanged")
        self.filterResultsChanged = Signal("filterResultsChanged")
        self.itemsChanged = Signal("itemsChanged")
        self.layoutChanged = Signal("layoutChanged")

        # State
        self.store = CollectionStore(SelectionState(
            selection_mode=SelectionMode(settings.selection.selection_mode),
            selected_keys=Selection(selected_keys),
            disabled_keys=frozenset(disabled_keys),
            disabled_behavior=DisabledBehavior(settings.selection.disabled_behavior),
            selection_behavior=SelectionBehavior(settings.selection.selection_behavior),
            disallow_empty_selection=settings.selection.disallow_empty_selection,
        ))

        # Managers
        self.selection_manager = SelectionManager(self.store)
        self.sort_manager = SortManager(self.store)
        self.filter_manager = FilterManager(self.store)

        self.selection_manager.selection_changed.connect(self.selectionChanged.emit)
        self.sort_manager.sort_changed.connect(self.sortChanged.emit)
        self.filter_manager.filter_changed.connect(self.filterChanged.emit)
        self.filter_manager.filter_results_changed.connect(self.filterResultsChanged.emit)
        self.store.items_changed.connect(self._on_items_changed)

        # Search
        filter_settings = settings.filter
        self.search = SearchCoordinator(
            self.filter_manager,
            search_index or FuzzySearchIndex(
                filter_keys=filter_settings.filter_keys,
                score_cutoff=filter_settings.score_cutoff,
                limit=filter_settings.result_limit,
            ),
            debounce_ms=filter_settings.debounce_ms,
            min_query_length=filter_settings.min_query_length,
        )

        # Layout
        layout_settings = settings.layout
        self._layout = self._resolve_layout(layout if layout is not None else LayoutKind.LIST)
        self._scale_probe = scale_probe
        self.measurement = MeasurementCoordinator(
            self._layout, scale_probe, layout_settings.width_change_threshold
        )
        self.virtualizer = Virtualizer(overscan=layout_settings.overscan)

        # Keyboard
        self.keyboard = SelectableCollection(
            self.selection_manager,
            self._build_keyboard_delegate(),
            typeahead_timeout_ms=settings.keyboard.typeahead_timeout_ms,
            page_size=settings.keyboard.page_size,
        )

    # --- Collection ---

    @property
    def collection(self) -> ListCollection:
        return self.store.collection

    @property
    def ordered_keys(self) -> List[Key]:
        return list(self.store.collection.get_keys())

    def set_items(self, records: Sequence[Any]):
        """
        Ingest records; the search index is rebuilt in the background.

        Selected keys whose records vanished are dropped and reported
        through selectionChanged.
        """
        before = self.selection_manager.selected_keys
        self.store.set_items(records, self.key_extractor, self.text_value_extractor)
        after = self.selection_manager.selected_keys
        if after != before:
            self.selection_manager.selection_changed.emit(after)
        self.search.schedule_rebuild(self.store.source_nodes)
        logger.debug(f"Loaded {len(records)} items")

    def _on_items_changed(self, collection: ListCollection):
        self._layout.set_items(collection)
        self.measurement.expect(collection.get_keys())
        if self._layout.container_width > 0:
            self._relayout()
        self.keyboard.set_keyboard_delegate(self._build_keyboard_delegate())
        self.itemsChanged.emit(collection)

    # --- Selection ---

    @property
    def selected_keys(self) -> Set[Key]:
        return self.selection_manager.selected_keys

    @property
    def focused_key(self) -> Optional[Key]:
        return self.selection_manager.focused_key

    def is_selected(self, key: Key) -> bool:
        return self.selection_manager.is_selected(key)

    def toggle_selection(self, key: Key):
        self.selection_manager.toggle_selection(key)

    def replace_selection(self, key: Key):
        self.selection_manager.replace_selection(key)

    def extend_selection(self, key: Key):
        self.selection_manager.extend_selection(key)

    def select_range(self, from_key: Key, to_key: Key):
        self.selection_manager.select_range(from_key, to_key)

    def select_all(self):
        self.selection_manager.select_all()

    def clear_selection(self):
        self.selection_manager.clear_selection()

    def set_focused_key(self, key: Optional[Key], child_focus_strategy: FocusStrategy = FocusStrategy.FIRST):
        self.selection_manager.set_focused_key(key, child_focus_strategy)

    def set_selection_mode(self, mode: SelectionMode):
        self.store.update_selection_state(selection_mode=SelectionMode(mode))

    def set_disabled_keys(self, keys: Iterable[Key]):
        self.store.update_selection_state(disabled_keys=frozenset(keys))
        self.keyboard.set_keyboard_delegate(self._build_keyboard_delegate())

    def press_item(self, key: Key, shift: bool = False, toggle_modifier: bool = False):
        """
        Pointer activation of an item.

        Args:
            key: Activated key
            shift: Extend the selection to key
            toggle_modifier: Ctrl/Meta held (toggle even under replace behavior)
        """
        manager = self.selection_manager
        if shift and manager.selection_mode == SelectionMode.MULTIPLE:
            manager.extend_selection(key)
        elif toggle_modifier or manager.selection_behavior == SelectionBehavior.TOGGLE:
            manager.toggle_selection(key)
        else:
            manager.replace_selection(key)
        manager.set_focused_key(key)

    # --- Keyboard ---

    def handle_key_down(self, key: str, shift: bool = False, ctrl: bool = False,
                        meta: bool = False, alt: bool = False) -> bool:
        return self.keyboard.handle_key_down(KeyEvent(key, shift, ctrl, meta, alt))

    def focus_in(self):
        self.keyboard.focus_in()

    def focus_out(self):
        self.keyboard.focus_out()

    @property
    def keyboard_delegate(self) -> KeyboardDelegate:
        return self.keyboard.keyboard_delegate

    def _build_keyboard_delegate(self) -> KeyboardDelegate:
        return self._layout.get_keyboard_delegate(
            self.store.collection,
            self.store.selection_state.disabled_keys,
            self._layout.container_width or None,
        )

    # --- Sort ---

    def sort_by(self, property: SortProperty, type: SortType = SortType.STRING,
                direction: Optional[SortDirection] = None):
        self.sort_manager.sort_by(property, type, direction)

    def set_sort_rules(self, rules: Iterable[SortRule]):
        self.sort_manager.set_sort_rules(rules)

    def toggle_sort_direction(self):
        self.sort_manager.toggle_sort_direction()

    def clear_sort(self):
        self.sort_manager.clear_sort()

    # --- Filter ---

    def set_query(self, query: str):
        """Update the query and schedule a debounced background search."""
        self.filter_manager.set_query(query)
        return self.search.submit(query)

    def clear_filter(self):
        self.search.cancel()
        self.filter_manager.clear_filter()

    # --- Layout ---

    @property
    def layout(self) -> Layout:
        return self._layout

    def set_layout(self, layout: Union[Layout, LayoutKind, str]):
        """Swap the layout strategy (e.g. list <-> grid)."""
        width = self._layout.container_width
        layout = self._resolve_layout(layout)
        self._layout = layout
        self._layout.set_items(self.store.collection)
        self.measurement = MeasurementCoordinator(
            layout, self._scale_probe, self.measurement.width_change_threshold
        )
        self.measurement.expect(self.store.collection.get_keys())
        if width > 0:
            self.update_layout(width)
        else:
            self.keyboard.set_keyboard_delegate(self._build_keyboard_delegate())

    def _resolve_layout(self, layout: Union[Layout, LayoutKind, str]) -> Layout:
        """Use a Layout as given, or build one of a kind from the layout settings."""
        if isinstance(layout, Layout):
            return layout

        kind = LayoutKind(layout)
        settings = self.config.data.layout
        if kind == LayoutKind.GRID:
            options = dict(gap=settings.grid_gap, min_item_width=settings.grid_min_item_width)
        elif kind == LayoutKind.INLINE_GRID:
            options = dict(
                gap=settings.inline_gap,
                item_width=settings.inline_item_width,
                item_height=settings.inline_item_height,
                vertical_bias=self.config.data.keyboard.vertical_alignment_bias,
            )
        else:
            options = dict(gap=settings.list_gap, padding=settings.list_padding)
        return create_layout(kind, **options)

    def update_layout(self, container_width: float) -> bool:
        """
        Apply a container width.

        Returns:
            True when the renderer must run a full measurement pass
        """
        remeasure = self.measurement.on_container_resize(container_width)
        self._after_layout()
        return remeasure

    def apply_measurements(self, measurements: dict):
        """Feed measured sizes (height or Size per key) into the layout."""
        self.measurement.apply(measurements)
        self._after_layout()

    def _relayout(self):
        self._layout.update(self._layout.container_width)
        self._after_layout()

    def _after_layout(self):
        self.virtualizer.set_rows(self._layout.get_rows())
        self.keyboard.set_keyboard_delegate(self._build_keyboard_delegate())
        self.layoutChanged.emit(self._layout)

    def get_layout_info(self, key: Key) -> Optional[LayoutInfo]:
        return self._layout.get_layout_info(key)

    def get_rows(self) -> List[RowInfo]:
        return self._layout.get_rows()

    def get_visible_window(self, scroll_top: float, viewport_height: float) -> VirtualWindow:
        return self.virtualizer.get_window(scroll_top, viewport_height)

    def scroll_to_key(self, key: Key, scroll_top: float, viewport_height: float) -> Optional[float]:
        return self.virtualizer.scroll_to_key(key, scroll_top, viewport_height)
