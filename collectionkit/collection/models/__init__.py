"""
Collection data models.
"""
from .node import Key, KeyExtractor, TextValueExtractor, Node, NodeType
from .collection import ListCollection, build_nodes
from .geometry import Size, Rect, LayoutInfo, RowInfo, Padding, Measurement
from .sort_rule import (
    SortRule,
    SortDirection,
    SortType,
    SortProperty,
    INSERTION_ORDER,
)

__all__ = [
    "Key",
    "KeyExtractor",
    "TextValueExtractor",
    "Node",
    "NodeType",
    "ListCollection",
    "build_nodes",
    "Size",
    "Rect",
    "LayoutInfo",
    "RowInfo",
    "Padding",
    "Measurement",
    "SortRule",
    "SortDirection",
    "SortType",
    "SortProperty",
    "INSERTION_ORDER",
]
