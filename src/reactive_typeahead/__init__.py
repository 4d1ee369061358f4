"""
reactive-typeahead: a Textual typeahead input bound to a reactive form control.
"""

from reactive_typeahead.accessors import (
    ControlValueAccessor,
    DefaultValueAccessor,
    ValueAccessorRegistry,
    default_registry,
)
from reactive_typeahead.errors import (
    ConfigurationError,
    FormControlNotFoundError,
    FormNotFoundError,
    ReactiveTypeaheadError,
)
from reactive_typeahead.forms import (
    FocusController,
    FocusNode,
    FormControl,
    FormGroup,
    ValidationMessage,
    Validators,
)
from reactive_typeahead.typeahead import (
    Direction,
    InputDecoration,
    SuggestionsBoxController,
    SuggestionsBoxDecoration,
    SuggestionsConfig,
    TextFieldConfig,
)
from reactive_typeahead.widgets import ReactiveForm, ReactiveTypeahead

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ControlValueAccessor",
    "DefaultValueAccessor",
    "Direction",
    "FocusController",
    "FocusNode",
    "FormControl",
    "FormControlNotFoundError",
    "FormGroup",
    "FormNotFoundError",
    "InputDecoration",
    "ReactiveForm",
    "ReactiveTypeahead",
    "ReactiveTypeaheadError",
    "SuggestionsBoxController",
    "SuggestionsBoxDecoration",
    "SuggestionsConfig",
    "TextFieldConfig",
    "ValidationMessage",
    "Validators",
    "ValueAccessorRegistry",
    "default_registry",
]
