"""
Filter + sort merge.

Combines background search results (matching keys and relevance scores)
with the user's sort rules to produce the visible ordering.
"""
from typing import AbstractSet, Iterable, List, Mapping, Optional

from collectionkit.collection.models import Key, Node, SortRule
from .comparators import Comparator, build_comparator, sort_nodes

# Score given to items the search did not score (0 is best)
WORST_SCORE = 1.0


def relevance_comparator(scores: Mapping[Key, float]) -> Comparator:
    def comparator(a: Node, b: Node) -> int:
        first = scores.get(a.key, WORST_SCORE)
        second = scores.get(b.key, WORST_SCORE)
        return (first > second) - (first < second)
    return comparator


def filter_and_sort(
    nodes: Iterable[Node],
    matching_keys: Optional[AbstractSet[Key]] = None,
    scores: Optional[Mapping[Key, float]] = None,
    rules: Iterable[SortRule] = (),
) -> List[Node]:
    """
    Filter nodes to the matching keys and order them.

    Relevance (when scores are given) is the primary axis; the user's rules
    only break ties between equally relevant items. The input is never
    mutated and the sort is stable.

    Args:
        nodes: Candidate nodes in source order
        matching_keys: Keys to keep, or None for "no active filter"
        scores: Relevance per key, lower is better
        rules: User sort rules

    Returns:
        New list of nodes
    """
    if matching_keys is not None:
        result = [node for node in nodes if node.key in matching_keys]
    else:
        result = list(nodes)

    rules = list(rules)
    prefix = relevance_comparator(scores) if scores else None
    if prefix is None and not rules:
        return result
    return sort_nodes(result, build_comparator(rules, prefix))
