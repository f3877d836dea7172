"""
CollectionStore - per-instance state container.

Holds the source nodes, the visible (filtered + sorted) collection and the
selection, sort and filter snapshots of one collection. Every update
replaces a whole snapshot, so readers never see a partial change.
"""
from dataclasses import replace
from typing import Any, List, Optional, Sequence

from loguru import logger

from collectionkit.core.events import Signal
from collectionkit.collection.models import (
    KeyExtractor,
    ListCollection,
    Node,
    TextValueExtractor,
    build_nodes,
)
from collectionkit.collection.selection import ALL, Selection, SelectionState
from collectionkit.collection.controllers import FilterState, SortState, filter_and_sort


class CollectionStore:
    """
    Explicitly owned state for one collection.

    Signals:
        items_changed(collection): the visible collection was rebuilt
        selection_state_changed(state): a new SelectionState was committed

    Example:
        store = CollectionStore(SelectionState(selection_mode=SelectionMode.MULTIPLE))
        store.set_items(records, key_extractor=lambda r: r["id"])
        store.collection.get_keys()
    """

    def __init__(
        self,
        selection_state: Optional[SelectionState] = None,
        sort_state: Optional[SortState] = None,
        filter_state: Optional[FilterState] = None,
    ):
        self._source_nodes: List[Node] = []
        self._collection = ListCollection()
        self._selection_state = selection_state or SelectionState()
        self._sort_state = sort_state or SortState()
        self._filter_state = filter_state or FilterState()

        self.items_changed = Signal("itemsChanged")
        self.selection_state_changed = Signal("selectionStateChanged")

    # --- Snapshots ---

    @property
    def collection(self) -> ListCollection:
        """Visible collection (after filter and sort)."""
        return self._collection

    @property
    def source_nodes(self) -> List[Node]:
        """All ingested nodes in source order."""
        return list(self._source_nodes)

    @property
    def size(self) -> int:
        return len(self._source_nodes)

    @property
    def selection_state(self) -> SelectionState:
        return self._selection_state

    @property
    def sort_state(self) -> SortState:
        return self._sort_state

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    # --- Items ---

    def set_items(
        self,
        records: Sequence[Any],
        key_extractor: KeyExtractor,
        text_value_extractor: Optional[TextValueExtractor] = None,
    ):
        """
        Ingest a new record sequence.

        Selected keys whose records vanished are dropped; a vanished focused
        key moves to the first visible key.
        """
        self._source_nodes = ListCollection(
            build_nodes(records, key_extractor, text_value_extractor)
        ).nodes
        self._rebuild(prune_selection=True)
        logger.debug(f"CollectionStore: {len(self._source_nodes)} item(s) ingested")

    def resort_items(self):
        """Re-run filter and sort over the source nodes, keeping the selection."""
        self._rebuild(prune_selection=False)

    def _rebuild(self, prune_selection: bool):
        state = self._filter_state
        nodes = filter_and_sort(
            self._source_nodes,
            state.matching_keys,
            state.scores,
            self._sort_state.sort_rules,
        )
        self._collection = ListCollection(nodes)

        selection = self._selection_state
        changes = {}
        if prune_selection and selection.selected_keys != ALL and len(selection.selected_keys) > 0:
            present = {node.key for node in self._source_nodes}
            vanished = [key for key in selection.selected_keys if key not in present]
            if vanished:
                changes["selected_keys"] = Selection(selection.selected_keys).difference_keys(vanished)

        focused = selection.focused_key
        if focused is not None and focused not in self._collection:
            changes["focused_key"] = self._collection.get_first_key()

        if changes:
            self.update_selection_state(**changes)

        self.items_changed.emit(self._collection)

    # --- State updates ---

    def update_selection_state(self, **changes):
        new_state = replace(self._selection_state, **changes)
        self._selection_state = new_state
        self.selection_state_changed.emit(new_state)

    def set_sort_state(self, state: SortState):
        rules_changed = state.sort_rules != self._sort_state.sort_rules
        self._sort_state = state
        if rules_changed:
            self.resort_items()

    def set_filter_state(self, state: FilterState):
        previous = self._filter_state
        self._filter_state = state
        if state.matching_keys != previous.matching_keys or state.scores != previous.scores:
            self.resort_items()
