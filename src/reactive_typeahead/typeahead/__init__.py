"""Framework-independent typeahead logic: buffer, synchronization, suggestions."""

from reactive_typeahead.typeahead.buffer import TextBuffer, TextRange, TextSelection
from reactive_typeahead.typeahead.config import (
    DEFAULT_DEBOUNCE_DURATION,
    Direction,
    InputDecoration,
    SuggestionsBoxDecoration,
    SuggestionsConfig,
    TextFieldConfig,
)
from reactive_typeahead.typeahead.suggestions import (
    STATUS_ROW,
    ItemBuilder,
    SuggestionsBoxController,
    SuggestionsCallback,
    SuggestionsController,
    SuggestionsPhase,
    SuggestionsSnapshot,
    build_options,
    choose_direction,
    should_show_dropdown,
)
from reactive_typeahead.typeahead.sync import SyncPhase, TypeaheadSyncState
from reactive_typeahead.typeahead.validation import (
    ShowErrorsFunction,
    ValidationMessages,
    default_show_errors,
    resolve_error_text,
)

__all__ = [
    "DEFAULT_DEBOUNCE_DURATION",
    "STATUS_ROW",
    "Direction",
    "InputDecoration",
    "ItemBuilder",
    "ShowErrorsFunction",
    "SuggestionsBoxController",
    "SuggestionsBoxDecoration",
    "SuggestionsCallback",
    "SuggestionsConfig",
    "SuggestionsController",
    "SuggestionsPhase",
    "SuggestionsSnapshot",
    "SyncPhase",
    "TextBuffer",
    "TextFieldConfig",
    "TextRange",
    "TextSelection",
    "TypeaheadSyncState",
    "ValidationMessages",
    "build_options",
    "choose_direction",
    "default_show_errors",
    "resolve_error_text",
    "should_show_dropdown",
]
