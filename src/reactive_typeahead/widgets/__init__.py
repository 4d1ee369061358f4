"""Textual widgets for reactive forms."""

from reactive_typeahead.widgets.form import ReactiveForm, find_form, resolve_named_control
from reactive_typeahead.widgets.input_field import TypeaheadInput
from reactive_typeahead.widgets.suggestions_box import SuggestionsBox, SuggestionsList
from reactive_typeahead.widgets.typeahead import ReactiveTypeahead

__all__ = [
    "ReactiveForm",
    "ReactiveTypeahead",
    "SuggestionsBox",
    "SuggestionsList",
    "TypeaheadInput",
    "find_form",
    "resolve_named_control",
]
