"""
Comparator builder for declarative sort rules.

Each rule becomes a ``(a, b) -> int`` comparator over Nodes; rules are
chained so the first non-zero result wins. Missing or unusable values
never raise: they sort to a fixed end of the list.
"""
import locale
import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Optional

from collectionkit.collection.models import Node, SortDirection, SortRule, SortType

Comparator = Callable[[Node, Node], int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


# --- Value access ---

def get_value(record: Any, path) -> Any:
    """
    Resolve a dotted path (or list of segments) against a record.

    Mappings are indexed by key, sequences by integer segment and anything
    else by attribute. Returns None as soon as a segment is missing.
    """
    segments = path.split(".") if isinstance(path, str) else list(path)
    current = record
    for segment in segments:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError, TypeError):
                return None
        else:
            current = getattr(current, str(segment), None)
    return current


# --- Value coercion ---

def _collation_key(value: str):
    return locale.strxfrm(value.casefold())


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _as_timestamp(value: Any) -> Optional[float]:
    """Seconds since epoch; naive datetimes are taken as UTC."""
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _as_timestamp(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


# --- Per-type comparators ---

def _last_if_missing(coerce: Callable[[Any], Any], compare: Callable[[Any, Any], int], path) -> Comparator:
    """Comparator where values that fail coercion sort last in either direction."""
    def comparator(a: Node, b: Node) -> int:
        first = coerce(get_value(a.value, path))
        second = coerce(get_value(b.value, path))
        if first is None and second is None:
            return 0
        if first is None:
            return 1
        if second is None:
            return -1
        return compare(first, second)
    return comparator


def string_comparator(path, direction: SortDirection) -> Comparator:
    sign = 1 if direction == SortDirection.ASCENDING else -1
    coerce = lambda v: _collation_key(v) if isinstance(v, str) else None
    return _last_if_missing(coerce, lambda x, y: sign * _cmp(x, y), path)


def number_comparator(path, direction: SortDirection) -> Comparator:
    ascending = direction == SortDirection.ASCENDING
    missing = math.inf if ascending else -math.inf

    def comparator(a: Node, b: Node) -> int:
        first = _as_number(get_value(a.value, path))
        second = _as_number(get_value(b.value, path))
        first = missing if first is None else first
        second = missing if second is None else second
        return _cmp(first, second) if ascending else _cmp(second, first)
    return comparator


def date_comparator(path, direction: SortDirection) -> Comparator:
    sign = 1 if direction == SortDirection.ASCENDING else -1
    return _last_if_missing(_as_timestamp, lambda x, y: sign * _cmp(x, y), path)


def boolean_comparator(path, direction: SortDirection) -> Comparator:
    sign = 1 if direction == SortDirection.ASCENDING else -1

    def comparator(a: Node, b: Node) -> int:
        return sign * _cmp(bool(get_value(a.value, path)), bool(get_value(b.value, path)))
    return comparator


def insertion_order_comparator(direction: SortDirection) -> Comparator:
    sign = 1 if direction == SortDirection.ASCENDING else -1
    return lambda a, b: sign * _cmp(a.index, b.index)


_TYPE_COMPARATORS = {
    SortType.STRING: string_comparator,
    SortType.NUMBER: number_comparator,
    SortType.DATE: date_comparator,
    SortType.BOOLEAN: boolean_comparator,
}


def rule_comparator(rule: SortRule) -> Comparator:
    if rule.is_insertion_order():
        return insertion_order_comparator(rule.direction)
    factory = _TYPE_COMPARATORS.get(rule.type, string_comparator)
    return factory(rule.property, rule.direction)


# --- Composition ---

def chain(*comparators: Comparator) -> Comparator:
    """First non-zero comparison wins."""
    def chained(a: Node, b: Node) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result:
                return result
        return 0
    return chained


def build_comparator(rules: Iterable[SortRule], prefix: Optional[Comparator] = None) -> Comparator:
    """
    Compose sort rules into one comparator.

    Args:
        rules: Rules in priority order (primary first)
        prefix: Optional comparator applied before every rule

    Returns:
        Comparator returning <0, 0 or >0
    """
    comparators = [rule_comparator(rule) for rule in rules]
    if prefix is not None:
        comparators.insert(0, prefix)
    return chain(*comparators)


def sort_nodes(nodes: Iterable[Node], comparator: Comparator) -> List[Node]:
    """Stable sort into a new list."""
    return sorted(nodes, key=cmp_to_key(comparator))
