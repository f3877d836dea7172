"""
ListCollection - immutable ordered snapshot of nodes.

Every rebuild (new records, new sort, new filter results) produces a new
ListCollection; existing snapshots are never mutated.
"""
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from loguru import logger

from .node import Key, KeyExtractor, Node, NodeType, TextValueExtractor


class ListCollection:
    """
    Ordered key sequence plus O(1) key -> node lookup.

    Duplicate keys are dropped (first occurrence wins) so the ordered
    sequence never contains the same key twice.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: Dict[Key, Node] = {}
        ordered: List[Key] = []
        for node in nodes:
            if node.key in self._nodes:
                logger.warning(f"ListCollection: duplicate key {node.key!r} ignored")
                continue
            self._nodes[node.key] = node
            ordered.append(node.key)
        self._keys = tuple(ordered)
        self._positions = {key: i for i, key in enumerate(self._keys)}

    @classmethod
    def from_records(
        cls,
        records: Sequence[Any],
        key_extractor: KeyExtractor,
        text_value_extractor: Optional[TextValueExtractor] = None,
    ) -> "ListCollection":
        """
        Build a collection from raw records.

        Args:
            records: Source records in their original order
            key_extractor: Returns the unique key of a record
            text_value_extractor: Returns the searchable text of a record

        Returns:
            New ListCollection whose node indices are source positions
        """
        return cls(build_nodes(records, key_extractor, text_value_extractor))

    # --- Size / iteration ---

    @property
    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Node]:
        for key in self._keys:
            yield self._nodes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    @property
    def nodes(self) -> List[Node]:
        return [self._nodes[key] for key in self._keys]

    # --- Lookup ---

    def get_keys(self) -> tuple:
        return self._keys

    def get_item(self, key: Key) -> Optional[Node]:
        return self._nodes.get(key)

    def index_of(self, key: Key) -> int:
        """Position of key in the ordered sequence, -1 if absent."""
        return self._positions.get(key, -1)

    def key_at(self, index: int) -> Optional[Key]:
        if 0 <= index < len(self._keys):
            return self._keys[index]
        return None

    def get_first_key(self) -> Optional[Key]:
        return self._keys[0] if self._keys else None

    def get_last_key(self) -> Optional[Key]:
        return self._keys[-1] if self._keys else None

    def get_key_before(self, key: Key) -> Optional[Key]:
        index = self.index_of(key)
        if index <= 0:
            return None
        return self._keys[index - 1]

    def get_key_after(self, key: Key) -> Optional[Key]:
        index = self.index_of(key)
        if index == -1:
            return None
        return self.key_at(index + 1)

    def __repr__(self) -> str:
        return f"ListCollection(size={self.size})"


def build_nodes(
    records: Sequence[Any],
    key_extractor: KeyExtractor,
    text_value_extractor: Optional[TextValueExtractor] = None,
) -> List[Node]:
    """Convert records into item nodes, keeping their source position as index."""
    nodes = []
    for index, record in enumerate(records):
        text = text_value_extractor(record) if text_value_extractor else None
        nodes.append(Node(
            key=key_extractor(record),
            type=NodeType.ITEM,
            value=record,
            text_value=text,
            index=index,
        ))
    return nodes
