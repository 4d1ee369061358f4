"""
TypeaheadInput - the text field inside ReactiveTypeahead.

A regular Input that reports focus and blur to the FocusNode it is attached
to, so the bound form control learns when it was touched.
"""

from __future__ import annotations

from typing import Optional

from textual import events
from textual.widgets import Input

from reactive_typeahead.forms import FocusNode
from reactive_typeahead.logger import get_logger
from reactive_typeahead.typeahead import TextBuffer, TextFieldConfig

logger = get_logger("widgets.input")


class TypeaheadInput(Input):
    """Input field wired to a focus node."""

    def __init__(self, config: TextFieldConfig, **kwargs) -> None:
        """
        Initialize the input field.

        Args:
            config: Text field options (placeholder, type, password, ...)
        """
        super().__init__(
            placeholder=config.placeholder,
            type=config.input_type,
            password=config.password,
            max_length=config.max_length,
            restrict=config.restrict,
            select_on_focus=config.select_on_focus,
            **kwargs,
        )
        self._bound_focus_node: Optional[FocusNode] = None
        self.apply_decoration(config)

    @property
    def focus_node(self) -> Optional[FocusNode]:
        return self._bound_focus_node

    def attach_focus_node(self, focus_node: Optional[FocusNode]) -> None:
        """Bind to ``focus_node``, releasing any previously attached node."""
        if focus_node is self._bound_focus_node:
            return
        if self._bound_focus_node is not None:
            self._bound_focus_node.detach(self)
        self._bound_focus_node = focus_node
        if focus_node is not None:
            focus_node.attach(self)
            logger.debug(f"Input attached to {focus_node!r}")

    def apply_decoration(self, config: TextFieldConfig) -> None:
        self.border_title = config.decoration.label
        self.border_subtitle = config.decoration.helper_text

    def show_buffer(self, buffer: TextBuffer) -> None:
        """Render a programmatic buffer update without triggering a query."""
        with self.prevent(Input.Changed):
            self.value = buffer.text
            self.cursor_position = buffer.selection.cursor

    def on_focus(self, event: events.Focus) -> None:
        if self._bound_focus_node is not None:
            self._bound_focus_node.notify_focus(True)

    def on_blur(self, event: events.Blur) -> None:
        if self._bound_focus_node is not None:
            self._bound_focus_node.notify_focus(False)
