"""
ReactiveTypeahead - a typeahead input bound to a reactive FormControl.

Example:
    ```python
    form = FormGroup({"city": FormControl(validators=[Validators.required])})

    ReactiveForm(
        form,
        ReactiveTypeahead(
            form_control_name="city",
            stringify=lambda city: city.name,
            suggestions_callback=search_cities,
            item_builder=lambda city: f"{city.name} ({city.country})",
            validation_messages={ValidationMessage.required: "Pick a city"},
        ),
    )
    ```
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from textual import events
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

from reactive_typeahead.accessors import ControlValueAccessor, ValueAccessorRegistry, default_registry
from reactive_typeahead.errors import ConfigurationError
from reactive_typeahead.forms import FocusController, FormControl, StatusChanged, TouchedChanged
from reactive_typeahead.logger import get_logger
from reactive_typeahead.typeahead import (
    ItemBuilder,
    ShowErrorsFunction,
    SuggestionsCallback,
    SuggestionsConfig,
    TextBuffer,
    TextFieldConfig,
    TypeaheadSyncState,
    ValidationMessages,
    resolve_error_text,
)

from .form import resolve_named_control
from .input_field import TypeaheadInput
from .suggestions_box import SuggestionsBox

logger = get_logger("widgets.typeahead")

T = TypeVar("T")
V = TypeVar("V")


class ReactiveTypeahead(Generic[T, V], Widget):
    """
    Text input with a suggestions dropdown, bound to a form control.

    Must be given exactly one of ``form_control`` or ``form_control_name``;
    the latter is looked up in the nearest ``ReactiveForm`` when mounted.

    Free-text edits never reach the control. The control changes only when a
    suggestion is selected, and the input follows every external change of
    the control's value.
    """

    DEFAULT_CSS = """
    ReactiveTypeahead {
        height: auto;
        layout: vertical;

        .typeahead--error {
            display: none;
            height: auto;
            color: $error;
            padding: 0 1;
        }

        .typeahead--error.-visible {
            display: block;
        }
    }

    ReactiveTypeahead.-invalid TypeaheadInput {
        border: tall $error 60%;
    }
    """

    class Selected(Message):
        """Posted after a suggestion was applied to the control."""

        def __init__(self, typeahead: ReactiveTypeahead[Any, Any], item: Any, text: str) -> None:
            super().__init__()
            self.typeahead = typeahead
            self.item = item
            self.text = text

        @property
        def control(self) -> ReactiveTypeahead[Any, Any]:
            return self.typeahead

    def __init__(
        self,
        *,
        stringify: Callable[[V], str],
        suggestions_callback: SuggestionsCallback[V],
        item_builder: ItemBuilder[V],
        form_control: Optional[FormControl[T]] = None,
        form_control_name: Optional[str] = None,
        validation_messages: Optional[ValidationMessages] = None,
        value_accessor: Optional[ControlValueAccessor[T, V]] = None,
        value_type: Optional[str] = None,
        accessor_registry: Optional[ValueAccessorRegistry] = None,
        show_errors: Optional[ShowErrorsFunction] = None,
        suggestions: Optional[SuggestionsConfig] = None,
        text_field: Optional[TextFieldConfig] = None,
        name: Optional[str] = None,
        id: Optional[str] = None,
        classes: Optional[str] = None,
        disabled: bool = False,
    ) -> None:
        """
        Args:
            stringify: Display text of a suggestion item.
            suggestions_callback: ``(pattern) -> items``, sync or async.
            item_builder: Renders one item as a dropdown option.
            form_control: Control to bind directly.
            form_control_name: Dotted path of the control in the ancestor form.
            validation_messages: Error key -> message (or callable on the error detail).
            value_accessor: Model/view conversion strategy.
            value_type: Tag of a registered accessor, instead of ``value_accessor``.
            accessor_registry: Registry used to resolve ``value_type``.
            show_errors: Predicate deciding when errors are displayed.
            suggestions: Options forwarded to the suggestions box.
            text_field: Options forwarded to the input.

        Raises:
            ConfigurationError: If both or neither control source is given,
                or both accessor sources are given, or ``value_type`` is unknown.
        """
        if (form_control is None) == (form_control_name is None):
            raise ConfigurationError(
                "Must provide a form_control or a form_control_name, but not both at the same time"
            )
        if value_accessor is not None and value_type is not None:
            raise ConfigurationError("Provide either value_accessor or value_type, not both")
        if value_type is not None:
            value_accessor = (accessor_registry or default_registry()).create(value_type)

        super().__init__(name=name, id=id, classes=classes, disabled=disabled)

        self.stringify = stringify
        self._form_control = form_control
        self._form_control_name = form_control_name
        self._value_accessor = value_accessor
        self._validation_messages = validation_messages
        self._show_errors = show_errors
        self._suggestions_config = suggestions or SuggestionsConfig()
        self._text_field = text_field or TextFieldConfig()

        self._sync_state: Optional[TypeaheadSyncState[T, V]] = None
        self._bound_control: Optional[FormControl[T]] = None
        self._error_text: Optional[str] = None

        self._field = TypeaheadInput(self._text_field, classes="typeahead--input")
        self._suggestions_box: SuggestionsBox[V] = SuggestionsBox(
            self._field,
            suggestions_callback=suggestions_callback,
            item_builder=item_builder,
            config=self._suggestions_config,
        )
        self._error_label = Static("", classes="typeahead--error")

    def compose(self) -> ComposeResult:
        yield self._field
        yield self._suggestions_box
        yield self._error_label

    # -- public surface --------------------------------------------------

    @property
    def control(self) -> FormControl[T]:
        if self._bound_control is None:
            raise ConfigurationError("ReactiveTypeahead is not mounted; its control is not resolved yet")
        return self._bound_control

    @property
    def input_field(self) -> TypeaheadInput:
        return self._field

    @property
    def suggestions_box(self) -> SuggestionsBox[V]:
        return self._suggestions_box

    @property
    def text_buffer(self) -> Optional[TextBuffer]:
        return self._sync_state.buffer if self._sync_state is not None else None

    @property
    def focus_controller(self) -> Optional[FocusController]:
        return self._sync_state.focus_controller if self._sync_state is not None else None

    @property
    def sync_state(self) -> Optional[TypeaheadSyncState[T, V]]:
        return self._sync_state

    @property
    def error_text(self) -> Optional[str]:
        return self._error_text

    @property
    def text_field(self) -> TextFieldConfig:
        return self._text_field

    def select_suggestion(self, item: V) -> None:
        """Apply ``item`` as if it had been picked from the dropdown."""
        if self._sync_state is None:
            raise ConfigurationError("Cannot select a suggestion before the widget is mounted")
        self._sync_state.select(item)
        self.post_message(self.Selected(self, item, self._sync_state.buffer.text))

    def configure_text_field(self, config: TextFieldConfig) -> None:
        """Replace the text field options; a new focus node re-registers focus."""
        self._text_field = config
        self._field.apply_decoration(config)
        if self._sync_state is not None:
            self._sync_state.set_focus_node(config.focus_node)
            self._field.attach_focus_node(self._sync_state.focus_node)
        self._refresh_error()

    # -- lifecycle -------------------------------------------------------

    def on_mount(self) -> None:
        control = self._resolve_control()
        self._bound_control = control

        self._sync_state = TypeaheadSyncState(
            control,
            self.stringify,
            value_accessor=self._value_accessor,
            focus_node=self._text_field.focus_node,
            on_text_changed=self._field.show_buffer,
        )
        self._sync_state.mount()
        self._field.attach_focus_node(self._sync_state.focus_node)

        control.events.subscribe(StatusChanged, self._on_control_status_changed)
        control.events.subscribe(TouchedChanged, self._on_control_touched_changed)
        self._field.disabled = control.disabled
        self._refresh_error()

        if self._text_field.autofocus:
            self._field.focus()
        logger.debug(f"ReactiveTypeahead mounted on {control!r}")

    def on_unmount(self) -> None:
        if self._bound_control is not None:
            self._bound_control.events.unsubscribe(StatusChanged, self._on_control_status_changed)
            self._bound_control.events.unsubscribe(TouchedChanged, self._on_control_touched_changed)
        if self._sync_state is not None:
            self._sync_state.unmount()
        self._field.attach_focus_node(None)

    def _resolve_control(self) -> FormControl[T]:
        if self._form_control is not None:
            return self._form_control
        assert self._form_control_name is not None
        return resolve_named_control(self.ancestors, self._form_control_name)

    # -- events ----------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self._field or self._sync_state is None:
            return
        self._sync_state.on_text_edited(event.value, self._field.cursor_position)
        self._suggestions_box.query_suggestions(event.value)

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        if self._field.has_focus:
            self._suggestions_box.on_target_focus()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        if not self._field.has_focus:
            self._suggestions_box.on_target_blur()

    def on_key(self, event: events.Key) -> None:
        box = self._suggestions_box
        if not box.is_open:
            return
        if event.key == "down":
            box.move_highlight(1)
        elif event.key == "up":
            box.move_highlight(-1)
        elif event.key == "escape":
            box.close()
        elif event.key == "enter":
            if not box.select_highlighted():
                return
        else:
            return
        event.prevent_default()
        event.stop()

    def on_suggestions_box_selected(self, message: SuggestionsBox.Selected) -> None:
        message.stop()
        self.select_suggestion(message.item)

    def _on_control_status_changed(self, event: StatusChanged) -> None:
        self._field.disabled = event.control.disabled
        self._refresh_error()

    def _on_control_touched_changed(self, event: TouchedChanged) -> None:
        self._refresh_error()

    def _refresh_error(self) -> None:
        if self._bound_control is None:
            return
        text = resolve_error_text(self._bound_control, self._validation_messages, self._show_errors)
        if text is None:
            text = self._text_field.decoration.error_text
        self._error_text = text
        self._error_label.update(text or "")
        self._error_label.set_class(text is not None, "-visible")
        self.set_class(text is not None, "-invalid")
