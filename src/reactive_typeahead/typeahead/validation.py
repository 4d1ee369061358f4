"""Error text shown under the typeahead input."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Union

from reactive_typeahead.forms import AbstractControl

__all__ = ["ValidationMessages", "ShowErrorsFunction", "default_show_errors", "resolve_error_text"]

ValidationMessages = Mapping[str, Union[str, Callable[[Any], str]]]
ShowErrorsFunction = Callable[[AbstractControl[Any]], bool]


def default_show_errors(control: AbstractControl[Any]) -> bool:
    """Errors become visible once the control is invalid and touched."""
    return control.invalid and control.touched


def resolve_error_text(
    control: AbstractControl[Any],
    validation_messages: Optional[ValidationMessages] = None,
    show_errors: Optional[ShowErrorsFunction] = None,
) -> Optional[str]:
    """
    Message for the control's first error, or None when nothing should show.

    A message may be a string or a callable receiving the error detail. Errors
    with no configured message fall back to their key.
    """
    predicate = show_errors or default_show_errors
    errors = control.errors
    if not errors or not predicate(control):
        return None

    key, detail = next(iter(errors.items()))
    message = (validation_messages or {}).get(key)
    if message is None:
        return key
    if callable(message):
        return message(detail)
    return message
