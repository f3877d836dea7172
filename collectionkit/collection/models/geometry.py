"""
Layout geometry value types.

All coordinates are layout-local pixels relative to the scroll container.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .node import Key


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class LayoutInfo:
    """Position of one item inside the layout."""
    key: Key
    rect: Rect


@dataclass(frozen=True)
class RowInfo:
    """
    A horizontal band of items sharing the same vertical offset.

    Rows are disjoint and ordered by y_start.
    """
    row_index: int
    y_start: float
    height: float
    item_keys: List[Key] = field(default_factory=list)

    @property
    def y_end(self) -> float:
        return self.y_start + self.height


@dataclass(frozen=True)
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def of(cls, value: Optional[Union[float, "Padding"]]) -> "Padding":
        """Normalise a uniform value (or None) into per-side padding."""
        if value is None:
            return cls()
        if isinstance(value, Padding):
            return value
        return cls(value, value, value, value)


Measurement = Union[float, Size]
