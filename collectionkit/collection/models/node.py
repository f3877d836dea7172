"""
Node Data Model.

A Node wraps one ingested record together with the metadata the engine
needs: its key, its kind, its searchable text and its ingestion index.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

Key = Union[str, int]

KeyExtractor = Callable[[Any], Key]
TextValueExtractor = Callable[[Any], str]


class NodeType(str, Enum):
    """Kind of node in the collection. Only items take part in selection."""
    ITEM = "item"
    SECTION = "section"
    HEADER = "header"


@dataclass(frozen=True)
class Node:
    """
    Immutable record wrapper.

    Attributes:
        key: Unique identifier of the record
        type: Node kind (item, section, header)
        value: The original record
        text_value: Text used for type-ahead and fuzzy search
        index: Position of the record in the source sequence
        level: Nesting depth (0 for root items)
        parent_key: Key of the enclosing node, if any

    Example:
        node = Node(key="a", type=NodeType.ITEM, value=record, text_value="Alice", index=0)
    """
    key: Key
    type: NodeType = NodeType.ITEM
    value: Any = None
    text_value: Optional[str] = None
    index: int = 0
    level: int = 0
    parent_key: Optional[Key] = None

    @property
    def is_item(self) -> bool:
        return self.type == NodeType.ITEM
