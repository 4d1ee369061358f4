"""Exception hierarchy for reactive-typeahead."""

from __future__ import annotations

__all__ = [
    "ReactiveTypeaheadError",
    "ConfigurationError",
    "FormNotFoundError",
    "FormControlNotFoundError",
]


class ReactiveTypeaheadError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(ReactiveTypeaheadError):
    """Raised when a widget or control is constructed with an invalid combination of arguments."""


class FormNotFoundError(ConfigurationError):
    """Raised when a control is bound by name but no ``ReactiveForm`` ancestor exists."""

    def __init__(self, control_name: str) -> None:
        super().__init__(
            f"Cannot bind form control '{control_name}' by name: "
            "no ReactiveForm ancestor was found"
        )
        self.control_name = control_name


class FormControlNotFoundError(ConfigurationError):
    """Raised when a control path does not resolve inside a form group."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Form control '{path}' not found")
        self.path = path
