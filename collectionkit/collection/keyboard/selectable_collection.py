"""
Keyboard dispatch for a selectable collection.

Translates key presses into delegate navigation plus SelectionManager
calls. Arrows, PageUp/PageDown and Home/End move focus, and shift extends
the selection. Space/Enter toggle, Ctrl/Meta+A selects all, Escape clears
and printable characters drive type-ahead.
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from collectionkit.collection.models import Key
from collectionkit.collection.selection import SelectionManager, SelectionMode
from .delegate import KeyboardDelegate


@dataclass(frozen=True)
class KeyEvent:
    """Minimal key press description supplied by the rendering layer."""
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False


class SelectableCollection:
    """
    Roving-focus keyboard controller.

    Args:
        selection_manager: Manager whose focus/selection is driven
        keyboard_delegate: Navigation strategy for the current layout
        disallow_select_all: Treat Ctrl/Meta+A as a type-ahead character
        disallow_type_ahead: Ignore printable characters
        typeahead_timeout_ms: Idle time after which the search buffer resets
        page_size: Steps moved by PageUp/PageDown (0 leaves them unhandled)
        clock: Monotonic seconds source

    Example:
        controller = SelectableCollection(manager, GridKeyboardDelegate(collection, 3))
        handled = controller.handle_key_down(KeyEvent("ArrowDown", shift=True))
    """

    def __init__(
        self,
        selection_manager: SelectionManager,
        keyboard_delegate: KeyboardDelegate,
        disallow_select_all: bool = False,
        disallow_type_ahead: bool = False,
        typeahead_timeout_ms: int = 500,
        page_size: int = 10,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.selection_manager = selection_manager
        self.keyboard_delegate = keyboard_delegate
        self.disallow_select_all = disallow_select_all
        self.disallow_type_ahead = disallow_type_ahead
        self.typeahead_timeout = typeahead_timeout_ms / 1000.0
        self.page_size = page_size
        self._clock = clock
        self._search = ""
        self._last_search_time: Optional[float] = None

    @property
    def search_buffer(self) -> str:
        return self._search

    def set_keyboard_delegate(self, delegate: KeyboardDelegate):
        self.keyboard_delegate = delegate

    # --- Key handling ---

    def handle_key_down(self, event: KeyEvent) -> bool:
        """
        Dispatch one key press.

        Returns:
            True when the key was consumed (the host should suppress its
            default action), False otherwise
        """
        manager = self.selection_manager
        delegate = self.keyboard_delegate
        focused = manager.focused_key

        if event.key == "ArrowDown":
            target = delegate.get_key_below(focused) if focused is not None else delegate.get_first_key()
            self._move_focus(target, event.shift)
            return True

        if event.key == "ArrowUp":
            target = delegate.get_key_above(focused) if focused is not None else delegate.get_last_key()
            self._move_focus(target, event.shift)
            return True

        if event.key in ("ArrowLeft", "ArrowRight"):
            if focused is None:
                return False
            if event.key == "ArrowLeft":
                target = delegate.get_key_left_of(focused)
            else:
                target = delegate.get_key_right_of(focused)
            self._move_focus(target, event.shift)
            return True

        if event.key in ("PageUp", "PageDown"):
            if focused is None or not self.page_size:
                return False
            if event.key == "PageUp":
                target = delegate.get_key_page_above(focused, self.page_size)
            else:
                target = delegate.get_key_page_below(focused, self.page_size)
            self._move_focus(target, event.shift)
            return True

        if event.key == "Home":
            self._move_focus(delegate.get_first_key(), event.shift)
            return True

        if event.key == "End":
            self._move_focus(delegate.get_last_key(), event.shift)
            return True

        if event.key in (" ", "Enter"):
            if focused is not None and manager.selection_mode != SelectionMode.NONE:
                manager.toggle_selection(focused)
                return True
            return False

        if event.key.lower() == "a" and (event.ctrl or event.meta):
            if not self.disallow_select_all and manager.selection_mode == SelectionMode.MULTIPLE:
                manager.select_all()
                return True
            return self.handle_type_ahead(event.key)

        if event.key == "Escape":
            if not manager.state.disallow_empty_selection:
                manager.clear_selection()
                return True
            return False

        if len(event.key) == 1 and not (event.ctrl or event.meta or event.alt):
            return self.handle_type_ahead(event.key)

        return False

    def handle_type_ahead(self, char: str) -> bool:
        if self.disallow_type_ahead:
            return False

        now = self._clock()
        if self._last_search_time is not None and now - self._last_search_time >= self.typeahead_timeout:
            self._search = ""
        self._last_search_time = now
        self._search += char

        match = self.keyboard_delegate.get_key_for_search(
            self._search, self.selection_manager.focused_key
        )
        if match is not None:
            logger.debug(f"SelectableCollection: type-ahead '{self._search}' -> {match!r}")
            self.selection_manager.set_focused_key(match)
        return True

    # --- Focus ---

    def focus_in(self):
        """Collection gained focus: restore or pick an initial focused key."""
        manager = self.selection_manager
        manager.set_focused(True)
        if manager.focused_key is None:
            initial = manager.first_selected_key
            if initial is None:
                initial = self.keyboard_delegate.get_first_key()
            if initial is not None:
                manager.set_focused_key(initial)

    def focus_out(self):
        self.selection_manager.set_focused(False)

    def _move_focus(self, target: Optional[Key], extend: bool):
        if target is None:
            return
        manager = self.selection_manager
        if extend and manager.selection_mode == SelectionMode.MULTIPLE:
            manager.extend_selection(target)
        manager.set_focused_key(target)
