"""
Sort rule data model.
"""
from enum import Enum
from typing import List, Union
from pydantic import BaseModel, ConfigDict, Field


# Property name meaning "original ingestion order"
INSERTION_ORDER = "*"

SortProperty = Union[str, List[str]]


class SortDirection(str, Enum):
    """Sort direction."""
    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


class SortType(str, Enum):
    """How property values are compared."""
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class SortRule(BaseModel):
    """
    A single sort criterion.

    Attributes:
        property: Dotted path, list of path segments, or "*" for ingestion order
        direction: asc or desc
        type: Value comparison strategy

    Example:
        SortRule(property="name")
        SortRule(property=["meta", "created"], type=SortType.DATE, direction=SortDirection.DESCENDING)
    """
    model_config = ConfigDict(frozen=True)

    property: SortProperty = Field(..., description="Property path or '*'")
    direction: SortDirection = Field(SortDirection.ASCENDING, description="Sort direction")
    type: SortType = Field(SortType.STRING, description="Comparison type")

    # "property" is a field name here, so this cannot be a @property
    def is_insertion_order(self) -> bool:
        return self.property == INSERTION_ORDER
