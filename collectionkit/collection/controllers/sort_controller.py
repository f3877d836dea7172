"""
SortManager - Manages sort state for a collection.

Supports single-property click-to-sort (with direction toggling) and
multi-rule sorting.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from loguru import logger

from collectionkit.core.events import Signal
from collectionkit.collection.models import SortDirection, SortProperty, SortRule, SortType


@dataclass(frozen=True)
class SortState:
    """
    Snapshot of sort settings.

    Attributes:
        sort_property: Primary property, or None when unsorted
        sort_direction: Direction of the primary property
        sort_type: Comparison type of the primary property
        sort_rules: Full rule list (primary first)
    """
    sort_property: Optional[SortProperty] = None
    sort_direction: SortDirection = SortDirection.ASCENDING
    sort_type: SortType = SortType.STRING
    sort_rules: Tuple[SortRule, ...] = ()


def _same_property(a: SortProperty, b: SortProperty) -> bool:
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return list(a) == list(b)
    return a == b


class SortManager:
    """
    Controls sorting for a collection store.

    Every mutation commits a new SortState (the store re-sorts its items)
    and emits ``sort_changed`` with that state.

    Example:
        manager = SortManager(store)
        manager.sort_by("name", SortType.STRING)   # asc
        manager.sort_by("name", SortType.STRING)   # toggles to desc
        manager.set_sort_rules([SortRule(property="name"), SortRule(property="age", type=SortType.NUMBER)])
    """

    def __init__(self, store):
        self._store = store
        self.sort_changed = Signal("sortChanged")

    @property
    def state(self) -> SortState:
        return self._store.sort_state

    # --- Queries ---

    @property
    def sort_property(self) -> Optional[SortProperty]:
        return self.state.sort_property

    @property
    def sort_direction(self) -> SortDirection:
        return self.state.sort_direction

    @property
    def sort_type(self) -> SortType:
        return self.state.sort_type

    @property
    def sort_rules(self) -> Tuple[SortRule, ...]:
        return self.state.sort_rules

    @property
    def is_sorted(self) -> bool:
        return self.state.sort_property is not None or len(self.state.sort_rules) > 0

    def is_sorted_by(self, property: SortProperty) -> bool:
        current = self.state.sort_property
        if current is None:
            return False
        return _same_property(current, property)

    def get_direction_for(self, property: SortProperty) -> Optional[SortDirection]:
        if not self.is_sorted_by(property):
            return None
        return self.state.sort_direction

    # --- Mutations ---

    def sort_by(
        self,
        property: SortProperty,
        type: SortType = SortType.STRING,
        direction: Optional[SortDirection] = None,
    ):
        """
        Sort by a single property.

        Args:
            property: Property path or "*"
            type: Comparison type
            direction: Explicit direction; when omitted, re-sorting by the
                current property toggles and a new property starts ascending
        """
        if direction is None:
            if self.is_sorted_by(property):
                direction = self.state.sort_direction.toggled()
            else:
                direction = SortDirection.ASCENDING

        # Single-property sorting replaces any multi-rule setup
        rule = SortRule(property=property, direction=direction, type=type)
        self._commit(SortState(property, direction, type, (rule,)))

    def toggle_sort_direction(self):
        if not self.is_sorted:
            return
        direction = self.state.sort_direction.toggled()
        rules = list(self.state.sort_rules)
        if rules:
            rules[0] = rules[0].model_copy(update={"direction": direction})
        self._commit(SortState(self.state.sort_property, direction, self.state.sort_type, tuple(rules)))

    def clear_sort(self):
        self._commit(SortState())

    def set_sort_rules(self, rules: Iterable[SortRule]):
        rules = tuple(rules)
        if rules:
            first = rules[0]
            state = SortState(first.property, first.direction, first.type, rules)
        else:
            state = SortState()
        self._commit(state)

    def _commit(self, state: SortState):
        logger.debug(f"Sort set: {state.sort_property} {state.sort_direction.value} ({len(state.sort_rules)} rule(s))")
        self._store.set_sort_state(state)
        self.sort_changed.emit(state)
