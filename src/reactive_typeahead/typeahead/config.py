"""Pass-through configuration for the suggestions box and the text field."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Literal, Optional

from reactive_typeahead.forms import FocusNode

if TYPE_CHECKING:
    from reactive_typeahead.typeahead.suggestions import SuggestionsBoxController

__all__ = [
    "DEFAULT_DEBOUNCE_DURATION",
    "Direction",
    "InputDecoration",
    "SuggestionsBoxDecoration",
    "SuggestionsConfig",
    "TextFieldConfig",
]

DEFAULT_DEBOUNCE_DURATION = 0.3


class Direction(Enum):
    """Side of the input the suggestions box opens on."""

    DOWN = "down"
    UP = "up"

    @property
    def opposite(self) -> Direction:
        return Direction.UP if self is Direction.DOWN else Direction.DOWN


@dataclass(frozen=True)
class SuggestionsBoxDecoration:
    """Visual options for the dropdown."""

    max_height: int = 10
    classes: str = ""
    border_title: Optional[str] = None


@dataclass(frozen=True)
class SuggestionsConfig:
    """Options forwarded unchanged to the suggestions box.

    Durations are in seconds.
    """

    debounce_duration: float = DEFAULT_DEBOUNCE_DURATION
    get_immediate_suggestions: bool = False
    hide_on_loading: bool = False
    hide_on_empty: bool = False
    hide_on_error: bool = False
    hide_suggestions_on_blur: bool = True
    keep_suggestions_on_loading: bool = True
    keep_suggestions_on_suggestion_selected: bool = False
    direction: Direction = Direction.DOWN
    auto_flip_direction: bool = False
    vertical_offset: int = 0
    animation_start: float = 0.25
    animation_duration: float = 0.5
    loading_builder: Optional[Callable[[], Any]] = None
    no_items_found_builder: Optional[Callable[[], Any]] = None
    error_builder: Optional[Callable[[BaseException], Any]] = None
    decoration: SuggestionsBoxDecoration = field(default_factory=SuggestionsBoxDecoration)
    controller: Optional[SuggestionsBoxController] = None

    def __post_init__(self) -> None:
        if self.debounce_duration < 0:
            raise ValueError("debounce_duration must be >= 0")
        if not 0.0 <= self.animation_start <= 1.0:
            raise ValueError("animation_start must be between 0 and 1")


@dataclass(frozen=True)
class InputDecoration:
    """Label and helper text around the input."""

    label: Optional[str] = None
    helper_text: Optional[str] = None
    error_text: Optional[str] = None


@dataclass(frozen=True)
class TextFieldConfig:
    """Options forwarded to the underlying ``Input``.

    ``focus_node`` is the caller's focus handle; changing it through
    ``ReactiveTypeahead.configure_text_field`` swaps the registered focus
    controller.
    """

    placeholder: str = ""
    input_type: Literal["text", "integer", "number"] = "text"
    password: bool = False
    max_length: int = 0
    restrict: Optional[str] = None
    autofocus: bool = False
    select_on_focus: bool = True
    focus_node: Optional[FocusNode] = None
    decoration: InputDecoration = field(default_factory=InputDecoration)
