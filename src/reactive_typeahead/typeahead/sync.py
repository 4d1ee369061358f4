"""
Value/focus synchronization between a form control and a typeahead input.

The control is the source of truth. Its value flows into the text buffer on
every change notification; the buffer flows back into the control only when
a suggestion is selected, never on free-text edits.

Lifecycle::

    UNMOUNTED --mount()--> FOCUS_REGISTERED --unmount()--> DISPOSED
                                 |    ^
                                 +----+  set_focus_node() swaps the controller

``MOUNTED`` is the short-lived state between subscribing to the control and
registering the focus controller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from reactive_typeahead.accessors import ControlValueAccessor, DefaultValueAccessor
from reactive_typeahead.errors import ConfigurationError
from reactive_typeahead.forms import FocusController, FocusNode, FormControl
from reactive_typeahead.logger import get_logger
from reactive_typeahead.utils import display_string

from .buffer import TextBuffer

logger = get_logger("typeahead.sync")

__all__ = ["SyncPhase", "TypeaheadSyncState"]

T = TypeVar("T")
V = TypeVar("V")


class SyncPhase(Enum):
    UNMOUNTED = "unmounted"
    MOUNTED = "mounted"
    FOCUS_REGISTERED = "focus_registered"
    DISPOSED = "disposed"


class TypeaheadSyncState(Generic[T, V]):
    """
    Mirrors a control's value into a :class:`TextBuffer` and keeps exactly one
    :class:`FocusController` registered on the control while mounted.

    Args:
        control: The bound form control.
        stringify: Converts a suggestion item to display text. Used on mount
            and on selection.
        value_accessor: Model/view conversion; identity by default.
        focus_node: Caller-supplied focus handle, if any.
        on_text_changed: Called with the buffer after every programmatic
            text update so the widget can render it.
    """

    def __init__(
        self,
        control: FormControl[T],
        stringify: Callable[[V], str],
        value_accessor: Optional[ControlValueAccessor[T, V]] = None,
        focus_node: Optional[FocusNode] = None,
        on_text_changed: Optional[Callable[[TextBuffer], None]] = None,
    ) -> None:
        self.control = control
        self.stringify = stringify
        self.value_accessor: ControlValueAccessor[Any, Any] = value_accessor or DefaultValueAccessor()
        self.buffer = TextBuffer()
        self.on_text_changed = on_text_changed
        self._focus_node = focus_node
        self._focus_controller: Optional[FocusController] = None
        self._phase = SyncPhase.UNMOUNTED

    @property
    def phase(self) -> SyncPhase:
        return self._phase

    @property
    def focus_controller(self) -> Optional[FocusController]:
        return self._focus_controller

    @property
    def focus_node(self) -> Optional[FocusNode]:
        """Node the input should attach to: the caller's, else the controller's own."""
        if self._focus_node is not None:
            return self._focus_node
        if self._focus_controller is not None:
            return self._focus_controller.focus_node
        return None

    def mount(self) -> None:
        if self._phase != SyncPhase.UNMOUNTED:
            raise ConfigurationError(f"Cannot mount synchronization state in phase {self._phase.value}")

        self.value_accessor.register_control(self.control, on_change=self.on_control_value_changed)
        initial = self.value_accessor.view_value
        self.buffer.replace("" if initial is None else self.stringify(initial))
        self._phase = SyncPhase.MOUNTED

        self._register_focus_controller(FocusController(focus_node=self._focus_node))
        logger.debug(f"Mounted with text={self.buffer.text!r}")
        self._notify_text_changed()

    def on_control_value_changed(self, value: Any) -> None:
        """External value change: render with ``str()``, not ``stringify``."""
        if self._phase not in (SyncPhase.MOUNTED, SyncPhase.FOCUS_REGISTERED):
            return
        self.buffer.replace(display_string(value))
        logger.debug(f"Control value changed; text={self.buffer.text!r}")
        self._notify_text_changed()

    def on_text_edited(self, text: str, cursor: int) -> None:
        """Free-text edit in the input. Updates the buffer only."""
        self.buffer.edit(text, cursor)

    def select(self, item: V) -> None:
        """
        Apply a selected suggestion: text first, then the control.

        Raises:
            ConfigurationError: If the state is not mounted
        """
        if self._phase not in (SyncPhase.MOUNTED, SyncPhase.FOCUS_REGISTERED):
            raise ConfigurationError(f"Cannot select a suggestion in phase {self._phase.value}")
        self.buffer.replace(self.stringify(item))
        self._notify_text_changed()
        self.value_accessor.update_model(item)
        logger.debug(f"Suggestion selected; text={self.buffer.text!r}")

    def set_focus_node(self, focus_node: Optional[FocusNode]) -> bool:
        """
        Swap the caller-supplied focus node.

        Returns:
            True when the focus controller was replaced.
        """
        if focus_node is self._focus_node:
            return False
        self._focus_node = focus_node
        if self._phase != SyncPhase.FOCUS_REGISTERED:
            return False
        self._unregister_focus_controller()
        self._register_focus_controller(FocusController(focus_node=focus_node))
        logger.debug("Focus node swapped; focus controller re-registered")
        return True

    def unmount(self) -> None:
        if self._phase in (SyncPhase.UNMOUNTED, SyncPhase.DISPOSED):
            self._phase = SyncPhase.DISPOSED
            return
        self._unregister_focus_controller()
        self.value_accessor.dispose()
        self._phase = SyncPhase.DISPOSED
        logger.debug("Synchronization state disposed")

    def _register_focus_controller(self, focus_controller: FocusController) -> None:
        self._focus_controller = focus_controller
        focus_controller.add_focus_listener(self._on_focus_changed)
        self.control.register_focus_controller(focus_controller)
        self._phase = SyncPhase.FOCUS_REGISTERED

    def _unregister_focus_controller(self) -> None:
        focus_controller = self._focus_controller
        if focus_controller is None:
            return
        self.control.unregister_focus_controller(focus_controller)
        focus_controller.dispose()
        self._focus_controller = None
        self._phase = SyncPhase.MOUNTED

    def _on_focus_changed(self, has_focus: bool) -> None:
        if not has_focus:
            self.control.mark_as_touched()

    def _notify_text_changed(self) -> None:
        if self.on_text_changed is not None:
            self.on_text_changed(self.buffer)
