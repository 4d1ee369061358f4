"""Shared fixtures for reactive-typeahead tests."""

from typing import Any, Optional

import pytest

from reactive_typeahead.forms import FocusController, FormControl


class SpyFormControl(FormControl[Any]):
    """FormControl recording focus controller (un)registration."""

    def __init__(self, value: Optional[Any] = None, **kwargs: Any) -> None:
        super().__init__(value, **kwargs)
        self.registered: list[FocusController] = []
        self.unregistered: list[FocusController] = []
        self.calls: list[str] = []

    def register_focus_controller(self, focus_controller: FocusController) -> None:
        self.registered.append(focus_controller)
        self.calls.append("register")
        super().register_focus_controller(focus_controller)

    def unregister_focus_controller(self, focus_controller: FocusController) -> None:
        self.unregistered.append(focus_controller)
        self.calls.append("unregister")
        super().unregister_focus_controller(focus_controller)


class FakeFocusableWidget:
    """Minimal stand-in for a Textual widget with focus()/blur()."""

    def __init__(self) -> None:
        self.has_focus = False
        self.focus_calls = 0
        self.blur_calls = 0

    def focus(self) -> None:
        self.focus_calls += 1

    def blur(self) -> None:
        self.blur_calls += 1


@pytest.fixture
def spy_control() -> SpyFormControl:
    return SpyFormControl()


@pytest.fixture
def fake_widget() -> FakeFocusableWidget:
    return FakeFocusableWidget()


@pytest.fixture
def make_spy_control():
    def factory(value: Optional[Any] = None, **kwargs: Any) -> SpyFormControl:
        return SpyFormControl(value, **kwargs)

    return factory
