"""
FilterManager - Manages filter state for a collection.

Tracks the user's query, the debounced query the search ran with, and
the search results (matching keys, count, relevance scores).
"""
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import AbstractSet, FrozenSet, Mapping, Optional

from loguru import logger

from collectionkit.core.events import Signal
from collectionkit.collection.models import Key


@dataclass(frozen=True)
class FilterState:
    """
    Snapshot of filter settings and results.

    ``matching_keys is None`` means no filter is active (everything
    matches); an empty frozenset means the query matched nothing.
    """
    query: str = ""
    debounced_query: str = ""
    is_filtering: bool = False
    is_indexing: bool = False
    matching_keys: Optional[FrozenSet[Key]] = None
    match_count: Optional[int] = None
    scores: Optional[Mapping[Key, float]] = None


class FilterManager:
    """
    Controls filtering for a collection store.

    ``filter_changed`` fires with the raw query on every query change;
    ``filter_results_changed`` fires with (keys, count) whenever results
    are applied or cleared.

    Example:
        manager = FilterManager(store)
        manager.set_query("ali")
        manager.apply_results({"a", "c"}, 2, {"a": 0.1, "c": 0.4})
        manager.is_match("b")   # False
    """

    def __init__(self, store):
        self._store = store
        self.filter_changed = Signal("filterChanged")
        self.filter_results_changed = Signal("filterResultsChanged")

    @property
    def state(self) -> FilterState:
        return self._store.filter_state

    # --- Queries ---

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def debounced_query(self) -> str:
        return self.state.debounced_query

    @property
    def is_filtering(self) -> bool:
        return self.state.is_filtering

    @property
    def is_indexing(self) -> bool:
        return self.state.is_indexing

    @property
    def has_active_filter(self) -> bool:
        return self.state.debounced_query != "" and self.state.matching_keys is not None

    @property
    def match_count(self) -> Optional[int]:
        return self.state.match_count

    @property
    def matching_keys(self) -> Optional[FrozenSet[Key]]:
        return self.state.matching_keys

    @property
    def scores(self) -> Optional[Mapping[Key, float]]:
        return self.state.scores

    def is_match(self, key: Key) -> bool:
        if self.state.matching_keys is None:
            return True
        return key in self.state.matching_keys

    # --- Mutations ---

    def set_query(self, query: str):
        self._store.set_filter_state(replace(self.state, query=query))
        self.filter_changed.emit(query)

    def clear_filter(self):
        self._store.set_filter_state(replace(
            self.state,
            query="",
            debounced_query="",
            is_filtering=False,
            matching_keys=None,
            match_count=None,
            scores=None,
        ))
        self.filter_changed.emit("")
        self.filter_results_changed.emit(None, None)

    def set_debounced_query(self, query: str):
        self._store.set_filter_state(replace(self.state, debounced_query=query))

    def set_filtering(self, is_filtering: bool):
        self._store.set_filter_state(replace(self.state, is_filtering=is_filtering))

    def set_indexing(self, is_indexing: bool):
        self._store.set_filter_state(replace(self.state, is_indexing=is_indexing))

    def apply_results(
        self,
        matching_keys: Optional[AbstractSet[Key]],
        match_count: Optional[int],
        scores: Optional[Mapping[Key, float]],
    ):
        """Commit one search outcome atomically (all three fields together)."""
        keys = frozenset(matching_keys) if matching_keys is not None else None
        frozen_scores = MappingProxyType(dict(scores)) if scores is not None else None
        self._store.set_filter_state(replace(
            self.state,
            is_filtering=False,
            matching_keys=keys,
            match_count=match_count,
            scores=frozen_scores,
        ))
        logger.debug(f"FilterManager: results applied ({match_count} match(es))")
        self.filter_results_changed.emit(set(keys) if keys is not None else None, match_count)

    def clear_results(self):
        """Drop results without touching the typed query."""
        self.apply_results(None, None, None)
