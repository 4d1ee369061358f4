"""
Suggestions dropdown rendered under (or above) a TypeaheadInput.

A lightweight OptionList overlay: queries go through a SuggestionsController,
and every snapshot it reports is rendered here.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from textual.app import ComposeResult
from textual.geometry import Offset
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, OptionList

from reactive_typeahead.logger import get_logger
from reactive_typeahead.typeahead import (
    STATUS_ROW,
    Direction,
    ItemBuilder,
    SuggestionsCallback,
    SuggestionsConfig,
    SuggestionsController,
    SuggestionsSnapshot,
    build_options,
    choose_direction,
    should_show_dropdown,
)

logger = get_logger("widgets.suggestions_box")

V = TypeVar("V")


class SuggestionsList(OptionList, can_focus=False):
    """Option list that never steals focus from the input."""


class SuggestionsBox(Generic[V], Widget):
    """Dropdown of suggestions for a target input."""

    DEFAULT_CSS = """
    SuggestionsBox {
        overlay: screen;
        constrain: none inside;
        display: none;
        width: 100%;
        height: auto;
        background: $surface;
        border: round $primary;
        padding: 0;

        SuggestionsList {
            width: 100%;
            height: auto;
            border: none;
            padding: 0 1;
            background: $surface;
        }
    }
    """

    class Selected(Message):
        """Posted when the user picks a suggestion."""

        def __init__(self, box: SuggestionsBox[Any], item: Any) -> None:
            super().__init__()
            self.box = box
            self.item = item

        @property
        def control(self) -> SuggestionsBox[Any]:
            return self.box

    def __init__(
        self,
        target: Input,
        *,
        suggestions_callback: SuggestionsCallback[V],
        item_builder: ItemBuilder[V],
        config: SuggestionsConfig,
        **kwargs: Any,
    ) -> None:
        classes = " ".join(filter(None, [kwargs.pop("classes", None), config.decoration.classes]))
        super().__init__(classes=classes or None, **kwargs)
        self.target = target
        self.config = config
        self._item_builder = item_builder
        self._option_items: list[Any] = []
        self._open_direction = config.direction
        self._query_controller: SuggestionsController[V] = SuggestionsController(
            suggestions_callback,
            debounce_duration=config.debounce_duration,
            on_update=self._render_snapshot,
            keep_suggestions_on_loading=config.keep_suggestions_on_loading,
        )
        if config.decoration.border_title:
            self.border_title = config.decoration.border_title

    def compose(self) -> ComposeResult:
        yield SuggestionsList()

    @property
    def option_list(self) -> OptionList:
        return self.query_one(SuggestionsList)

    @property
    def controller(self) -> SuggestionsController[V]:
        return self._query_controller

    @property
    def items(self) -> list[V]:
        """Items behind the selectable options; status rows are left out."""
        return [item for item in self._option_items if item is not STATUS_ROW]

    @property
    def direction(self) -> Direction:
        return self._open_direction

    @property
    def is_open(self) -> bool:
        return bool(self.display)

    def on_mount(self) -> None:
        self.option_list.styles.max_height = self.config.decoration.max_height
        if self.config.controller is not None:
            self.config.controller.attach(self)
        logger.debug(f"SuggestionsBox mounted (target={self.target!r})")

    def on_unmount(self) -> None:
        self._query_controller.cancel()
        if self.config.controller is not None:
            self.config.controller.detach(self)

    # -- querying --------------------------------------------------------

    def query_suggestions(self, pattern: str) -> None:
        """Start a debounced query, or reset when there is nothing to ask for."""
        if not pattern and not self.config.get_immediate_suggestions:
            self._query_controller.clear()
            return
        self._query_controller.request(pattern)

    def on_target_focus(self) -> None:
        if self.config.get_immediate_suggestions or self.target.value:
            self.query_suggestions(self.target.value)

    def on_target_blur(self) -> None:
        if self.config.hide_suggestions_on_blur:
            self.close()

    def _render_snapshot(self, snapshot: SuggestionsSnapshot[V]) -> None:
        if not self.is_attached:
            return
        pairs = build_options(snapshot, self.config, self._item_builder)
        option_list = self.option_list
        option_list.clear_options()
        option_list.add_options([option for option, _ in pairs])
        self._option_items = [item for _, item in pairs]

        first = next((index for index, item in enumerate(self._option_items) if item is not STATUS_ROW), None)
        if first is not None:
            option_list.highlighted = first

        if should_show_dropdown(snapshot, self.config, has_focus=self.target.has_focus):
            self.open()
        else:
            self.close()

    # -- visibility ------------------------------------------------------

    def open(self) -> None:
        if not self._option_items:
            return
        was_open = self.is_open
        self.display = True
        self.call_after_refresh(self.realign)
        if not was_open and self.config.animation_duration > 0:
            self.styles.opacity = self.config.animation_start
            self.styles.animate("opacity", value=1.0, duration=self.config.animation_duration)

    def close(self) -> None:
        self.display = False

    def realign(self) -> None:
        """
        Place the box on the configured side of the input.

        With ``auto_flip_direction`` the opposite side is used when the
        preferred one lacks room.
        """
        if not self.is_attached or not self.is_open:
            return
        target_region = self.target.region
        box_height = self.outer_size.height
        screen_height = self.screen.size.height
        self._open_direction = choose_direction(
            self.config.direction,
            auto_flip=self.config.auto_flip_direction,
            box_height=box_height,
            space_above=target_region.y,
            space_below=screen_height - target_region.bottom,
        )
        gap = self.config.vertical_offset
        if self._open_direction is Direction.DOWN:
            self.styles.offset = Offset(0, gap)
        else:
            self.styles.offset = Offset(0, -(target_region.height + box_height + gap))

    # -- selection -------------------------------------------------------

    def move_highlight(self, delta: int) -> None:
        if delta > 0:
            self.option_list.action_cursor_down()
        else:
            self.option_list.action_cursor_up()

    def select_highlighted(self) -> bool:
        highlighted = self.option_list.highlighted
        if highlighted is None:
            return False
        return self._select_index(highlighted)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self._select_index(event.option_index)

    def _select_index(self, index: int) -> bool:
        if index < 0 or index >= len(self._option_items):
            return False
        item = self._option_items[index]
        if item is STATUS_ROW:
            return False
        self.post_message(self.Selected(self, item))
        if not self.config.keep_suggestions_on_suggestion_selected:
            self.close()
        return True
