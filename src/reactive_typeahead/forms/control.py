"""
Reactive form model: controls holding typed values plus validity metadata.

Controls publish their changes on a per-control :class:`EventBus`; widgets
subscribe to those events to stay in sync. A control never references a
widget directly, it only knows the focus controllers registered on it.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Mapping, Optional, TypeVar

from reactive_typeahead.errors import FormControlNotFoundError
from reactive_typeahead.logger import get_logger

from .bus import EventBus
from .events import ControlStatus, StatusChanged, TouchedChanged, ValueChanged
from .focus import FocusController
from .validators import ValidatorFunction

logger = get_logger("forms.control")

__all__ = ["AbstractControl", "FormControl", "FormGroup"]

T = TypeVar("T")


class AbstractControl(Generic[T]):
    """Behaviour shared by single controls and groups."""

    def __init__(
        self,
        validators: Iterable[ValidatorFunction] = (),
        disabled: bool = False,
    ) -> None:
        self.events = EventBus()
        self._validators: list[ValidatorFunction] = list(validators)
        self._errors: dict[str, Any] = {}
        self._published_errors: dict[str, Any] = {}
        self._status = ControlStatus.DISABLED if disabled else ControlStatus.VALID
        self._disabled = disabled
        self._touched = False
        self._dirty = False
        self._parent: Optional[FormGroup] = None

    @property
    def value(self) -> Optional[T]:
        raise NotImplementedError

    @property
    def parent(self) -> Optional[FormGroup]:
        return self._parent

    @property
    def status(self) -> ControlStatus:
        return self._status

    @property
    def valid(self) -> bool:
        return self._status == ControlStatus.VALID

    @property
    def invalid(self) -> bool:
        return self._status == ControlStatus.INVALID

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def enabled(self) -> bool:
        return not self._disabled

    @property
    def errors(self) -> dict[str, Any]:
        return dict(self._errors)

    @property
    def touched(self) -> bool:
        return self._touched

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def pristine(self) -> bool:
        return not self._dirty

    def has_error(self, key: str) -> bool:
        return key in self._errors

    def error(self, key: str) -> Any:
        return self._errors.get(key)

    def set_validators(self, validators: Iterable[ValidatorFunction]) -> None:
        self._validators = list(validators)
        self.update_value_and_validity(emit_event=False)

    def set_errors(self, errors: Mapping[str, Any], *, emit_event: bool = True) -> None:
        """Replace the current errors manually (e.g. from a server-side check)."""
        self._errors = dict(errors)
        self._apply_status(self._compute_status(self._errors), emit_event=emit_event)

    def update_value_and_validity(
        self,
        *,
        update_parent: bool = True,
        emit_event: bool = True,
    ) -> None:
        """Re-run validators, then notify subscribers and the parent group."""
        self._errors = {} if self._disabled else self._run_validators()
        self._apply_status(self._compute_status(self._errors), emit_event=emit_event)

        if emit_event:
            self.events.publish(ValueChanged(control=self, value=self.value))

        if update_parent and self._parent is not None:
            self._parent.update_value_and_validity(update_parent=True, emit_event=emit_event)

    def mark_as_touched(self, *, update_parent: bool = True, emit_event: bool = True) -> None:
        if not self._touched:
            self._touched = True
            if emit_event:
                self.events.publish(TouchedChanged(control=self, touched=True))
        if update_parent and self._parent is not None:
            self._parent.mark_as_touched(update_parent=True, emit_event=emit_event)

    def mark_as_untouched(self, *, emit_event: bool = True) -> None:
        if self._touched:
            self._touched = False
            if emit_event:
                self.events.publish(TouchedChanged(control=self, touched=False))

    def mark_as_dirty(self, *, update_parent: bool = True) -> None:
        self._dirty = True
        if update_parent and self._parent is not None:
            self._parent.mark_as_dirty(update_parent=True)

    def mark_as_pristine(self) -> None:
        self._dirty = False

    def disable(self, *, emit_event: bool = True) -> None:
        """Disable the control; only the status changes, no ``ValueChanged`` is published."""
        self._disabled = True
        self._errors = {}
        self._apply_status(ControlStatus.DISABLED, emit_event=emit_event)

        if self._parent is not None:
            self._parent.update_value_and_validity(update_parent=True, emit_event=emit_event)

    def enable(self, *, emit_event: bool = True) -> None:
        self._disabled = False
        self.update_value_and_validity(emit_event=emit_event)

    def _run_validators(self) -> dict[str, Any]:
        errors: dict[str, Any] = {}
        for validator in self._validators:
            result = validator(self)
            if result:
                errors.update(result)
        return errors

    def _compute_status(self, errors: Mapping[str, Any]) -> ControlStatus:
        if self._disabled:
            return ControlStatus.DISABLED
        return ControlStatus.INVALID if errors else ControlStatus.VALID

    def _apply_status(self, status: ControlStatus, *, emit_event: bool) -> None:
        changed = status != self._status or self._errors != self._published_errors
        self._status = status
        if changed and emit_event:
            self._published_errors = dict(self._errors)
            self.events.publish(StatusChanged(control=self, status=status, errors=dict(self._errors)))


class FormControl(AbstractControl[T]):
    """
    A single value plus validity, touched/dirty flags and focus controllers.

    Example:
        >>> control = FormControl(value="Lisbon", validators=[Validators.required])
        >>> control.value = None
        >>> control.invalid
        True
    """

    def __init__(
        self,
        value: Optional[T] = None,
        validators: Iterable[ValidatorFunction] = (),
        disabled: bool = False,
        touched: bool = False,
    ) -> None:
        super().__init__(validators=validators, disabled=disabled)
        self._value = value
        self._touched = touched
        self._focus_controllers: list[FocusController] = []
        self.update_value_and_validity(update_parent=False, emit_event=False)

    def __repr__(self) -> str:
        return f"FormControl(value={self._value!r}, status={self._status.value})"

    @property
    def value(self) -> Optional[T]:
        return self._value

    @value.setter
    def value(self, value: Optional[T]) -> None:
        self.update_value(value)

    def update_value(
        self,
        value: Optional[T],
        *,
        update_parent: bool = True,
        emit_event: bool = True,
    ) -> None:
        self._value = value
        self.update_value_and_validity(update_parent=update_parent, emit_event=emit_event)

    def reset(
        self,
        value: Optional[T] = None,
        *,
        disabled: Optional[bool] = None,
        emit_event: bool = True,
    ) -> None:
        """Restore pristine/untouched state and set ``value``."""
        if disabled is not None:
            self._disabled = disabled
        self.mark_as_pristine()
        self.mark_as_untouched(emit_event=emit_event)
        self.update_value(value, emit_event=emit_event)

    # -- focus -----------------------------------------------------------

    @property
    def focus_controllers(self) -> tuple[FocusController, ...]:
        return tuple(self._focus_controllers)

    @property
    def has_focus(self) -> bool:
        return any(controller.has_focus for controller in self._focus_controllers)

    def register_focus_controller(self, focus_controller: FocusController) -> None:
        if focus_controller in self._focus_controllers:
            logger.warning(f"Focus controller already registered on {self!r}; skipping")
            return
        self._focus_controllers.append(focus_controller)
        logger.debug(f"Registered focus controller ({len(self._focus_controllers)} active)")

    def unregister_focus_controller(self, focus_controller: FocusController) -> None:
        if focus_controller in self._focus_controllers:
            self._focus_controllers.remove(focus_controller)
            logger.debug(f"Unregistered focus controller ({len(self._focus_controllers)} active)")

    def focus(self) -> None:
        """Move focus to the most recently registered input."""
        if self._focus_controllers:
            self._focus_controllers[-1].request_focus()

    def unfocus(self) -> None:
        for controller in self._focus_controllers:
            controller.unfocus()


class FormGroup(AbstractControl[dict[str, Any]]):
    """
    A named collection of controls.

    Nested controls are addressed with dotted paths: ``group.control("address.city")``.
    """

    def __init__(
        self,
        controls: Mapping[str, AbstractControl[Any]],
        validators: Iterable[ValidatorFunction] = (),
        disabled: bool = False,
    ) -> None:
        super().__init__(validators=validators, disabled=disabled)
        self._controls: dict[str, AbstractControl[Any]] = dict(controls)
        for child in self._controls.values():
            child._parent = self
        self.update_value_and_validity(update_parent=False, emit_event=False)

    def __repr__(self) -> str:
        return f"FormGroup(controls={list(self._controls)}, status={self._status.value})"

    @property
    def controls(self) -> dict[str, AbstractControl[Any]]:
        return dict(self._controls)

    @property
    def value(self) -> dict[str, Any]:
        return {name: child.value for name, child in self._controls.items()}

    def control(self, path: str) -> AbstractControl[Any]:
        """
        Resolve a dotted control path.

        Raises:
            FormControlNotFoundError: If any segment of the path is missing
        """
        current: AbstractControl[Any] = self
        for segment in path.split("."):
            if not isinstance(current, FormGroup) or segment not in current._controls:
                raise FormControlNotFoundError(path)
            current = current._controls[segment]
        return current

    def contains(self, path: str) -> bool:
        try:
            self.control(path)
        except FormControlNotFoundError:
            return False
        return True

    def update_value(
        self,
        value: Mapping[str, Any],
        *,
        update_parent: bool = True,
        emit_event: bool = True,
    ) -> None:
        for name, child_value in value.items():
            child = self.control(name)
            if isinstance(child, (FormGroup, FormControl)):
                child.update_value(child_value, update_parent=False, emit_event=emit_event)
        self.update_value_and_validity(update_parent=update_parent, emit_event=emit_event)

    def mark_all_as_touched(self) -> None:
        for child in self._controls.values():
            if isinstance(child, FormGroup):
                child.mark_all_as_touched()
            else:
                child.mark_as_touched(update_parent=False)
        self.mark_as_touched()

    def _compute_status(self, errors: Mapping[str, Any]) -> ControlStatus:
        if self._disabled:
            return ControlStatus.DISABLED
        if errors or any(child.invalid for child in self._controls.values()):
            return ControlStatus.INVALID
        return ControlStatus.VALID
