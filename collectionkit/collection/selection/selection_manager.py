"""
Selection Manager - selection policy over a live collection.

Wraps the Selection value type together with the current ordered
collection, selection mode and disabled keys, and implements the
high-level click/keyboard operations (toggle, replace, extend, range,
select all, clear).
"""
from typing import List, Optional, Set

from loguru import logger

from collectionkit.core.events import Signal
from collectionkit.collection.models import Key
from .selection import ALL, Selection
from .state import (
    DisabledBehavior,
    FocusStrategy,
    SelectionBehavior,
    SelectionMode,
    SelectionState,
)


class SelectionManager:
    """
    Rich selection API bound to one collection store.

    The manager keeps no state of its own: every query reads the store's
    current snapshot and every mutation commits a replacement snapshot.

    Usage:
        manager = SelectionManager(store)
        manager.selection_changed.connect(on_selection_changed)

        manager.toggle_selection("a")
        manager.extend_selection("d")   # shift+click
        if manager.is_selected("b"):
            ...
    """

    def __init__(self, store):
        self._store = store
        self.selection_changed = Signal("selectionChanged")

    @property
    def state(self) -> SelectionState:
        return self._store.selection_state

    @property
    def collection(self):
        return self._store.collection

    # --- Queries ---

    @property
    def selection_mode(self) -> SelectionMode:
        return self.state.selection_mode

    @property
    def focused_key(self) -> Optional[Key]:
        return self.state.focused_key

    @property
    def is_focused(self) -> bool:
        return self.state.is_focused

    @property
    def selection_behavior(self) -> SelectionBehavior:
        return self.state.selection_behavior

    @property
    def disabled_behavior(self) -> DisabledBehavior:
        return self.state.disabled_behavior

    @property
    def disabled_keys(self):
        return self.state.disabled_keys

    def is_selected(self, key: Key) -> bool:
        if self.state.selection_mode == SelectionMode.NONE:
            return False
        if self.state.selected_keys == ALL:
            return self.can_select_item(key)
        return key in self.state.selected_keys

    def is_disabled(self, key: Key) -> bool:
        return key in self.state.disabled_keys

    def can_focus_item(self, key: Key) -> bool:
        """Focusable unless disabled under disabled_behavior 'all'."""
        if self.state.disabled_behavior == DisabledBehavior.ALL and self.is_disabled(key):
            return False
        node = self.collection.get_item(key)
        return node is not None and node.is_item

    def can_select_item(self, key: Key) -> bool:
        if self.state.selection_mode == SelectionMode.NONE:
            return False
        if self.is_disabled(key):
            return False
        node = self.collection.get_item(key)
        return node is not None and node.is_item

    @property
    def selected_keys(self) -> Set[Key]:
        """Materialised selected keys ('all' expands to every selectable key)."""
        if self.state.selected_keys == ALL:
            return set(self._all_selectable_keys())
        return set(self.state.selected_keys)

    @property
    def is_empty(self) -> bool:
        if self.state.selected_keys == ALL:
            return False
        return len(self.state.selected_keys) == 0

    @property
    def is_select_all(self) -> bool:
        selected = self.state.selected_keys
        if selected == ALL:
            return True
        if len(selected) == 0:
            return False
        return all(key in selected for key in self._all_selectable_keys())

    @property
    def first_selected_key(self) -> Optional[Key]:
        if self.state.selected_keys == ALL:
            return self.collection.get_first_key()
        for key in self.collection.get_keys():
            if key in self.state.selected_keys:
                return key
        return None

    @property
    def last_selected_key(self) -> Optional[Key]:
        if self.state.selected_keys == ALL:
            return self.collection.get_last_key()
        for key in reversed(self.collection.get_keys()):
            if key in self.state.selected_keys:
                return key
        return None

    # --- Focus ---

    def set_focused_key(self, key: Optional[Key], child_focus_strategy: FocusStrategy = FocusStrategy.FIRST):
        """Move focus; unknown keys are ignored."""
        if key is None or self.collection.get_item(key) is not None:
            self._store.update_selection_state(
                focused_key=key,
                child_focus_strategy=child_focus_strategy,
            )

    def set_focused(self, is_focused: bool):
        self._store.update_selection_state(is_focused=is_focused)

    # --- Mutations ---

    def toggle_selection(self, key: Key):
        if not self.can_select_item(key):
            return

        current = self._ensure_selection()
        if key in current:
            if self.state.disallow_empty_selection and len(current) == 1:
                logger.debug(f"SelectionManager: keeping last selected key {key!r}")
                return
            new_selection = current.toggle_key(key)
        elif self.state.selection_mode == SelectionMode.SINGLE:
            new_selection = Selection((key,), key, key)
        else:
            new_selection = current.toggle_key(key)

        self._update_selection(new_selection)

    def replace_selection(self, key: Key):
        if self.state.selection_mode == SelectionMode.NONE:
            return

        if self.can_select_item(key):
            new_selection = Selection((key,), key, key)
        else:
            new_selection = Selection()

        if self.state.disallow_empty_selection and len(new_selection) == 0:
            return

        self._update_selection(new_selection)

    def extend_selection(self, to_key: Key):
        """Shift+click/arrow: move the active range so it ends at to_key."""
        if self.state.selection_mode != SelectionMode.MULTIPLE:
            self.replace_selection(to_key)
            return

        current = self._ensure_selection()
        anchor_key = current.anchor_key
        if anchor_key is None:
            anchor_key = self.state.focused_key if self.state.focused_key is not None else to_key
        previous_current = current.current_key if current.current_key is not None else anchor_key

        # Drop the previous range, then add the new one
        new_selection = Selection(current, anchor_key, to_key)
        new_selection = new_selection.difference_keys(self.get_key_range(anchor_key, previous_current))
        new_selection = new_selection.union_keys(
            key for key in self.get_key_range(anchor_key, to_key) if self.can_select_item(key)
        )

        self._update_selection(new_selection)

    def select_all(self):
        if self.state.selection_mode != SelectionMode.MULTIPLE:
            return
        was_all = self.state.selected_keys == ALL
        before = self.selected_keys
        self._store.update_selection_state(selected_keys=ALL)
        if not was_all and before != self.selected_keys:
            self.selection_changed.emit(self.selected_keys)

    def clear_selection(self):
        if self.state.disallow_empty_selection:
            return
        self._store.update_selection_state(focused_key=None)
        self._update_selection(Selection())

    def select_range(self, from_key: Key, to_key: Key):
        """Select the inclusive range between two keys, in either order."""
        if self.state.selection_mode != SelectionMode.MULTIPLE:
            return
        keys = [key for key in self.get_key_range(from_key, to_key) if self.can_select_item(key)]
        self._update_selection(Selection(keys, from_key, to_key))

    def set_selected_keys(self, keys):
        """Controlled update: replace the selection with keys (or 'all')."""
        if keys == ALL:
            self.select_all()
            return
        selection = keys if isinstance(keys, Selection) else Selection(keys)
        self._update_selection(selection)

    # --- Helpers ---

    def get_key_range(self, from_key: Key, to_key: Key) -> List[Key]:
        """
        Keys between two boundaries, inclusive, in collection order.

        Returns:
            The range regardless of which boundary comes first, or an empty
            list when either boundary is not in the collection.
        """
        start = self.collection.index_of(from_key)
        end = self.collection.index_of(to_key)
        if start == -1 or end == -1:
            return []
        if start > end:
            start, end = end, start
        return list(self.collection.get_keys()[start:end + 1])

    def _ensure_selection(self) -> Selection:
        selected = self.state.selected_keys
        if selected == ALL:
            return Selection(self._all_selectable_keys())
        if isinstance(selected, Selection):
            return selected
        return Selection(selected)

    def _all_selectable_keys(self) -> List[Key]:
        return [key for key in self.collection.get_keys() if self.can_select_item(key)]

    def _update_selection(self, selection: Selection):
        """Commit a new selection and notify when the key set changed."""
        before = self.selected_keys
        self._store.update_selection_state(selected_keys=selection)
        after = set(selection)
        if before != after:
            logger.debug(f"SelectionManager: {len(after)} key(s) selected")
            self.selection_changed.emit(after)
