"""
Value accessors: strategies converting between a control's model value and
the value a widget works with.

The caller picks an accessor explicitly, either by instance or by a type tag
looked up in a :class:`ValueAccessorRegistry`. Nothing here inspects the
runtime type of a control's value.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Any, Callable, Generic, Optional, TypeVar

from reactive_typeahead.errors import ConfigurationError
from reactive_typeahead.forms import FormControl, ValueChanged
from reactive_typeahead.logger import get_logger

logger = get_logger("accessors")

__all__ = [
    "ControlValueAccessor",
    "DefaultValueAccessor",
    "IntValueAccessor",
    "FloatValueAccessor",
    "DateTimeValueAccessor",
    "TimeValueAccessor",
    "ValueAccessorRegistry",
    "default_registry",
]

ModelT = TypeVar("ModelT")
ViewT = TypeVar("ViewT")


class ControlValueAccessor(Generic[ModelT, ViewT]):
    """
    Bridge between a :class:`FormControl` and a widget.

    ``register_control`` subscribes to the control. External value changes are
    converted with :meth:`model_to_view_value` and handed to ``on_change``.
    Changes the widget pushes through :meth:`update_model` are not echoed back.
    """

    def __init__(self) -> None:
        self._control: Optional[FormControl[ModelT]] = None
        self._on_change: Optional[Callable[[Optional[ViewT]], None]] = None
        self._updating_model = False

    @property
    def control(self) -> Optional[FormControl[ModelT]]:
        return self._control

    def model_to_view_value(self, model_value: Optional[ModelT]) -> Optional[ViewT]:
        raise NotImplementedError

    def view_to_model_value(self, view_value: Optional[ViewT]) -> Optional[ModelT]:
        raise NotImplementedError

    @property
    def view_value(self) -> Optional[ViewT]:
        """Current control value converted for the widget."""
        if self._control is None:
            return None
        return self.model_to_view_value(self._control.value)

    def register_control(
        self,
        control: FormControl[ModelT],
        on_change: Optional[Callable[[Optional[ViewT]], None]] = None,
    ) -> None:
        if self._control is not None:
            self.dispose()
        self._control = control
        self._on_change = on_change
        control.events.subscribe(ValueChanged, self._on_control_value_changed)

    def update_model(self, view_value: Optional[ViewT]) -> None:
        """Push a widget value into the control and mark it dirty."""
        if self._control is None:
            raise ConfigurationError("Value accessor has no registered control")
        self._updating_model = True
        try:
            self._control.mark_as_dirty()
            self._control.update_value(self.view_to_model_value(view_value))
        finally:
            self._updating_model = False

    def dispose(self) -> None:
        if self._control is not None:
            self._control.events.unsubscribe(ValueChanged, self._on_control_value_changed)
        self._control = None
        self._on_change = None

    def _on_control_value_changed(self, event: ValueChanged) -> None:
        if self._updating_model:
            return
        if self._on_change is not None:
            self._on_change(self.model_to_view_value(event.value))


class DefaultValueAccessor(ControlValueAccessor[Any, Any]):
    """Identity accessor: the widget sees the model value unchanged."""

    def model_to_view_value(self, model_value: Any) -> Any:
        return model_value

    def view_to_model_value(self, view_value: Any) -> Any:
        return view_value


class IntValueAccessor(ControlValueAccessor[int, str]):
    def model_to_view_value(self, model_value: Optional[int]) -> str:
        return "" if model_value is None else str(model_value)

    def view_to_model_value(self, view_value: Optional[str]) -> Optional[int]:
        if view_value is None or not str(view_value).strip():
            return None
        try:
            return int(str(view_value).strip())
        except ValueError:
            return None


class FloatValueAccessor(ControlValueAccessor[float, str]):
    def model_to_view_value(self, model_value: Optional[float]) -> str:
        return "" if model_value is None else str(model_value)

    def view_to_model_value(self, view_value: Optional[str]) -> Optional[float]:
        if view_value is None or not str(view_value).strip():
            return None
        try:
            return float(str(view_value).strip())
        except ValueError:
            return None


class DateTimeValueAccessor(ControlValueAccessor[datetime, str]):
    """ISO 8601 text <-> ``datetime``."""

    def model_to_view_value(self, model_value: Optional[datetime]) -> str:
        return "" if model_value is None else model_value.isoformat()

    def view_to_model_value(self, view_value: Optional[str]) -> Optional[datetime]:
        if not view_value:
            return None
        try:
            return datetime.fromisoformat(view_value.strip())
        except ValueError:
            return None


class TimeValueAccessor(ControlValueAccessor[time, str]):
    """``HH:MM`` text <-> ``time``."""

    def model_to_view_value(self, model_value: Optional[time]) -> str:
        return "" if model_value is None else model_value.strftime("%H:%M")

    def view_to_model_value(self, view_value: Optional[str]) -> Optional[time]:
        if not view_value:
            return None
        try:
            hours, minutes = view_value.strip().split(":", 1)
            return time(int(hours), int(minutes))
        except ValueError:
            return None


AccessorFactory = Callable[[], ControlValueAccessor[Any, Any]]


class ValueAccessorRegistry:
    """Maps a caller-chosen type tag to an accessor factory."""

    def __init__(self, factories: Optional[dict[str, AccessorFactory]] = None) -> None:
        self._factories: dict[str, AccessorFactory] = dict(factories or {})

    def register(self, tag: str, factory: AccessorFactory) -> None:
        if tag in self._factories:
            logger.debug(f"Replacing value accessor factory for tag '{tag}'")
        self._factories[tag] = factory

    def tags(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, tag: object) -> bool:
        return tag in self._factories

    def create(self, tag: str) -> ControlValueAccessor[Any, Any]:
        """
        Build a fresh accessor for ``tag``.

        Raises:
            ConfigurationError: If no factory is registered for ``tag``
        """
        factory = self._factories.get(tag)
        if factory is None:
            raise ConfigurationError(
                f"Unknown value type '{tag}'; expected one of: {', '.join(self.tags())}"
            )
        return factory()


def default_registry() -> ValueAccessorRegistry:
    """Registry holding the built-in accessors."""
    return ValueAccessorRegistry(
        {
            "default": DefaultValueAccessor,
            "int": IntValueAccessor,
            "float": FloatValueAccessor,
            "datetime": DateTimeValueAccessor,
            "time": TimeValueAccessor,
        }
    )
