"""
Collection Core - Shared infrastructure.

Provides:
- ConfigManager: Per-collection configuration with optional persistence
- Signal: Synchronous observer used for change notifications
- setup_logging: Loguru sink configuration
"""
from .config import (
    ConfigManager,
    CollectionConfig,
    SelectionSettings,
    KeyboardSettings,
    LayoutSettings,
    FilterSettings,
)
from .events import Signal
from .logging import setup_logging

__all__ = [
    "ConfigManager",
    "CollectionConfig",
    "SelectionSettings",
    "KeyboardSettings",
    "LayoutSettings",
    "FilterSettings",
    "Signal",
    "setup_logging",
]
