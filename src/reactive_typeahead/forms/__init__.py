"""Reactive form model consumed by the typeahead widget."""

from reactive_typeahead.forms.bus import EventBus
from reactive_typeahead.forms.control import AbstractControl, FormControl, FormGroup
from reactive_typeahead.forms.events import (
    ControlStatus,
    Event,
    FocusChanged,
    StatusChanged,
    TouchedChanged,
    ValueChanged,
)
from reactive_typeahead.forms.focus import FocusController, FocusNode
from reactive_typeahead.forms.validators import ValidationMessage, ValidatorFunction, Validators

__all__ = [
    "AbstractControl",
    "ControlStatus",
    "Event",
    "EventBus",
    "FocusChanged",
    "FocusController",
    "FocusNode",
    "FormControl",
    "FormGroup",
    "StatusChanged",
    "TouchedChanged",
    "ValidationMessage",
    "ValidatorFunction",
    "Validators",
    "ValueChanged",
]
