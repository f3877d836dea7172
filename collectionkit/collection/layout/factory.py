from typing import Union

from .base import LayoutKind
from .grid_layout import GridLayout
from .inline_grid_layout import InlineGridLayout
from .list_layout import ListLayout

AnyLayout = Union[ListLayout, GridLayout, InlineGridLayout]

_LAYOUTS = {
    LayoutKind.LIST: ListLayout,
    LayoutKind.GRID: GridLayout,
    LayoutKind.INLINE_GRID: InlineGridLayout,
}


def create_layout(kind: Union[LayoutKind, str], **options) -> AnyLayout:
    """
    Build a layout by kind.

    Example:
        layout = create_layout("grid", columns=3, gap=8)
    """
    layout_cls = _LAYOUTS[LayoutKind(kind)]
    return layout_cls(**options)
