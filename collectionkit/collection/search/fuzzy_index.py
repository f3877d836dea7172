"""
FuzzySearchIndex - default search oracle backed by rapidfuzz.

Scores are normalised so 0 is a perfect match and 1 the worst, which is
the scale the relevance comparator expects.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from loguru import logger
from rapidfuzz import fuzz, process, utils

from collectionkit.collection.models import Key, Node
from collectionkit.collection.controllers.comparators import get_value


@dataclass(frozen=True)
class SearchResult:
    matching_keys: FrozenSet[Key] = frozenset()
    scores: Dict[Key, float] = field(default_factory=dict)

    @property
    def match_count(self) -> int:
        return len(self.matching_keys)


class FuzzySearchIndex:
    """
    In-memory fuzzy index over node text.

    Args:
        filter_keys: Property paths whose string values are searched; when
            empty the node's text value is used
        score_cutoff: Minimum WRatio score (0-100) for a match
        limit: Maximum number of matches, None for all

    Example:
        index = FuzzySearchIndex(filter_keys=["name", "tags"])
        index.build(collection.nodes)
        result = index.search("ali")
    """

    def __init__(
        self,
        filter_keys: Sequence[str] = (),
        score_cutoff: float = 60.0,
        limit: Optional[int] = None,
    ):
        self.filter_keys = list(filter_keys)
        self.score_cutoff = score_cutoff
        self.limit = limit
        self._keys: List[Key] = []
        self._choices: List[str] = []

    @property
    def size(self) -> int:
        return len(self._keys)

    def build(self, nodes: Iterable[Node]):
        """Replace the index contents with the given nodes."""
        keys = []
        choices = []
        for node in nodes:
            keys.append(node.key)
            choices.append(self._text_for(node))
        self._keys = keys
        self._choices = choices
        logger.debug(f"FuzzySearchIndex: indexed {len(keys)} item(s)")

    def search(self, query: str) -> SearchResult:
        if not query or not self._choices:
            return SearchResult()

        matches = process.extract(
            query,
            self._choices,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=self.limit,
            score_cutoff=self.score_cutoff,
        )
        # matches is list of (choice, score, index)
        scores = {}
        for _choice, score, index in matches:
            scores[self._keys[index]] = 1.0 - float(score) / 100.0
        return SearchResult(frozenset(scores), scores)

    def _text_for(self, node: Node) -> str:
        if not self.filter_keys:
            if node.text_value is not None:
                return node.text_value
            return node.value if isinstance(node.value, str) else ""

        parts = []
        for path in self.filter_keys:
            value = get_value(node.value, path)
            if isinstance(value, str):
                parts.append(value)
            elif isinstance(value, (list, tuple)):
                parts.extend(v for v in value if isinstance(v, str))
        return " ".join(parts)
