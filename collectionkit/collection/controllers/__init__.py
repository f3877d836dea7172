"""
Sort/filter controllers and the merge pipeline.
"""
from .comparators import (
    Comparator,
    build_comparator,
    chain,
    get_value,
    rule_comparator,
    sort_nodes,
)
from .pipeline import filter_and_sort, relevance_comparator, WORST_SCORE
from .sort_controller import SortManager, SortState
from .filter_controller import FilterManager, FilterState

__all__ = [
    "Comparator",
    "build_comparator",
    "chain",
    "get_value",
    "rule_comparator",
    "sort_nodes",
    "filter_and_sort",
    "relevance_comparator",
    "WORST_SCORE",
    "SortManager",
    "SortState",
    "FilterManager",
    "FilterState",
]
