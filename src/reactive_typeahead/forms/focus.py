"""
Focus handles shared between form controls and input widgets.

A :class:`FocusNode` is attached to exactly one widget and reports focus
changes of that widget. A :class:`FocusController` is what a form control
holds: it lets ``control.focus()`` reach the widget and lets the widget tell
the control when it was blurred.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from reactive_typeahead.logger import get_logger

from .bus import EventBus
from .events import FocusChanged

logger = get_logger("forms.focus")

__all__ = ["FocusNode", "FocusController"]


class FocusNode:
    """Focus handle for a single widget."""

    def __init__(self, debug_label: str | None = None) -> None:
        self.debug_label = debug_label
        self.events = EventBus()
        self._widget: Any = None
        self._has_focus = False
        self._disposed = False

    def __repr__(self) -> str:
        label = self.debug_label or hex(id(self))
        return f"FocusNode({label}, has_focus={self._has_focus})"

    @property
    def widget(self) -> Any:
        return self._widget

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    @property
    def disposed(self) -> bool:
        return self._disposed

    def attach(self, widget: Any) -> None:
        """Bind this node to ``widget`` (anything with ``focus()``/``blur()``)."""
        self._widget = widget
        self._has_focus = bool(getattr(widget, "has_focus", False))

    def detach(self, widget: Any = None) -> None:
        """Unbind from the current widget, or only if it is ``widget``."""
        if widget is None or widget is self._widget:
            self._widget = None

    def request_focus(self) -> None:
        if self._widget is None:
            logger.debug(f"{self!r} has no widget attached; focus request ignored")
            return
        self._widget.focus()

    def unfocus(self) -> None:
        if self._widget is not None:
            self._widget.blur()

    def notify_focus(self, has_focus: bool) -> None:
        """Called by the attached widget on focus/blur."""
        if self._disposed or has_focus == self._has_focus:
            return
        self._has_focus = has_focus
        self.events.publish(FocusChanged(has_focus=has_focus))

    def add_listener(self, listener: Callable[[FocusChanged], None]) -> None:
        self.events.subscribe(FocusChanged, listener)

    def remove_listener(self, listener: Callable[[FocusChanged], None]) -> None:
        self.events.unsubscribe(FocusChanged, listener)

    def dispose(self) -> None:
        self._widget = None
        self.events.clear()
        self._disposed = True


class FocusController:
    """
    Mediator a form control uses to command focus on its input.

    Args:
        focus_node: Caller-supplied node. When omitted the controller creates
            its own node and disposes it together with itself.
    """

    def __init__(self, focus_node: Optional[FocusNode] = None) -> None:
        self._owns_node = focus_node is None
        self._focus_node = focus_node if focus_node is not None else FocusNode("default")
        self._focus_listeners: list[Callable[[bool], None]] = []
        self._focus_node.add_listener(self._on_focus_node_changed)
        self._disposed = False

    @property
    def focus_node(self) -> FocusNode:
        return self._focus_node

    @property
    def owns_focus_node(self) -> bool:
        return self._owns_node

    @property
    def has_focus(self) -> bool:
        return self._focus_node.has_focus

    @property
    def disposed(self) -> bool:
        return self._disposed

    def request_focus(self) -> None:
        self._focus_node.request_focus()

    def unfocus(self) -> None:
        self._focus_node.unfocus()

    def add_focus_listener(self, listener: Callable[[bool], None]) -> None:
        if listener not in self._focus_listeners:
            self._focus_listeners.append(listener)

    def remove_focus_listener(self, listener: Callable[[bool], None]) -> None:
        if listener in self._focus_listeners:
            self._focus_listeners.remove(listener)

    def _on_focus_node_changed(self, event: FocusChanged) -> None:
        for listener in list(self._focus_listeners):
            listener(event.has_focus)

    def dispose(self) -> None:
        """Release the node subscription; disposes the node only if owned."""
        if self._disposed:
            return
        self._focus_node.remove_listener(self._on_focus_node_changed)
        self._focus_listeners.clear()
        if self._owns_node:
            self._focus_node.dispose()
        self._disposed = True
