"""Event types published by form controls.

Every control owns an :class:`~reactive_typeahead.forms.bus.EventBus` and
publishes these events on it, so widgets can observe a control without the
control knowing anything about the UI layer.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reactive_typeahead.forms.control import AbstractControl

__all__ = [
    "ControlStatus",
    "Event",
    "ValueChanged",
    "StatusChanged",
    "TouchedChanged",
    "FocusChanged",
]


class ControlStatus(Enum):
    """Validation status of a control."""

    VALID = "VALID"
    INVALID = "INVALID"
    DISABLED = "DISABLED"


@dataclass
class Event:
    """Base class for all control events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class ValueChanged(Event):
    """Published after a control's value was updated.

    Attributes:
        control: The control whose value changed
        value: The new value
    """

    control: AbstractControl[Any]
    value: Any


@dataclass
class StatusChanged(Event):
    """Published when validation status or errors change."""

    control: AbstractControl[Any]
    status: ControlStatus
    errors: dict[str, Any] = field(default_factory=dict)


@dataclass
class TouchedChanged(Event):
    """Published when a control is marked touched or untouched."""

    control: AbstractControl[Any]
    touched: bool


@dataclass
class FocusChanged(Event):
    """Published by a focus node when its widget gains or loses focus."""

    has_focus: bool
