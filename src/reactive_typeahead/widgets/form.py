"""
ReactiveForm - container that exposes a FormGroup to descendant widgets.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from textual.containers import Vertical
from textual.widget import Widget

from reactive_typeahead.errors import ConfigurationError, FormNotFoundError
from reactive_typeahead.forms import FormControl, FormGroup


class ReactiveForm(Vertical):
    """Vertical container holding the form group its fields bind to by name."""

    DEFAULT_CSS = """
    ReactiveForm {
        height: auto;
    }
    """

    def __init__(self, form_group: FormGroup, *children: Widget, **kwargs: Any) -> None:
        super().__init__(*children, **kwargs)
        self.form_group = form_group


def find_form(ancestors: Iterable[Any]) -> Optional[ReactiveForm]:
    """Nearest ReactiveForm among ``ancestors`` (ordered innermost first)."""
    for node in ancestors:
        if isinstance(node, ReactiveForm):
            return node
    return None


def resolve_named_control(ancestors: Iterable[Any], name: str) -> FormControl[Any]:
    """
    Look ``name`` up in the nearest ReactiveForm.

    Raises:
        FormNotFoundError: If no ReactiveForm is among the ancestors
        FormControlNotFoundError: If the group has no control at ``name``
        ConfigurationError: If ``name`` points at a group instead of a control
    """
    form = find_form(ancestors)
    if form is None:
        raise FormNotFoundError(name)
    control = form.form_group.control(name)
    if not isinstance(control, FormControl):
        raise ConfigurationError(f"'{name}' is a FormGroup; a typeahead binds to a FormControl")
    return control
