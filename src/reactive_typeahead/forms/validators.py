"""Built-in control validators.

A validator is a callable taking a control and returning ``None`` when the
value is valid, or a mapping from error key to error detail otherwise.
"""

from __future__ import annotations

import re
from collections.abc import Sized
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from reactive_typeahead.forms.control import AbstractControl

__all__ = ["ValidationMessage", "Validators", "ValidatorFunction"]

ValidatorFunction = Callable[["AbstractControl[Any]"], Optional[Mapping[str, Any]]]

# local@domain.tld, no whitespace
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationMessage:
    """Error keys produced by :class:`Validators`."""

    required = "required"
    email = "email"
    min_length = "min_length"
    max_length = "max_length"
    pattern = "pattern"
    min = "min"
    max = "max"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class Validators:
    """Factory namespace for the built-in validators."""

    @staticmethod
    def required(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
        if _is_empty(control.value):
            return {ValidationMessage.required: True}
        return None

    @staticmethod
    def email(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
        value = control.value
        if _is_empty(value) or _EMAIL_RE.match(str(value)):
            return None
        return {ValidationMessage.email: True}

    @staticmethod
    def min_length(length: int) -> ValidatorFunction:
        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            value = control.value
            if value is None or not isinstance(value, Sized):
                return None
            if len(value) < length:
                return {
                    ValidationMessage.min_length: {
                        "required_length": length,
                        "actual_length": len(value),
                    }
                }
            return None

        return validator

    @staticmethod
    def max_length(length: int) -> ValidatorFunction:
        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            value = control.value
            if value is None or not isinstance(value, Sized):
                return None
            if len(value) > length:
                return {
                    ValidationMessage.max_length: {
                        "required_length": length,
                        "actual_length": len(value),
                    }
                }
            return None

        return validator

    @staticmethod
    def pattern(regex: str | re.Pattern[str]) -> ValidatorFunction:
        compiled = re.compile(regex) if isinstance(regex, str) else regex

        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            value = control.value
            if _is_empty(value):
                return None
            if compiled.fullmatch(str(value)) is None:
                return {
                    ValidationMessage.pattern: {
                        "required_pattern": compiled.pattern,
                        "actual_value": value,
                    }
                }
            return None

        return validator

    @staticmethod
    def min(minimum: Any) -> ValidatorFunction:
        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            value = control.value
            if value is None:
                return None
            if value < minimum:
                return {ValidationMessage.min: {"min": minimum, "actual": value}}
            return None

        return validator

    @staticmethod
    def max(maximum: Any) -> ValidatorFunction:
        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            value = control.value
            if value is None:
                return None
            if value > maximum:
                return {ValidationMessage.max: {"max": maximum, "actual": value}}
            return None

        return validator

    @staticmethod
    def compose(validators: Sequence[ValidatorFunction]) -> ValidatorFunction:
        """Merge the errors of several validators into one mapping."""

        def validator(control: AbstractControl[Any]) -> Optional[Mapping[str, Any]]:
            errors: dict[str, Any] = {}
            for child in validators:
                result = child(control)
                if result:
                    errors.update(result)
            return errors or None

        return validator
