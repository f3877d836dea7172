"""
Event System - Synchronous change notifications.

Provides:
- Signal: Simple observer pattern used for every collection change notification

Usage:
    from collectionkit.core.events import Signal

    selection_changed = Signal("selectionChanged")
    selection_changed.connect(on_selection_changed)
    selection_changed.emit({"a", "b"})
"""
from .observer import Signal


__all__ = ["Signal"]
