from datetime import datetime, time

import pytest

from reactive_typeahead.accessors import (
    DateTimeValueAccessor,
    DefaultValueAccessor,
    FloatValueAccessor,
    IntValueAccessor,
    TimeValueAccessor,
    ValueAccessorRegistry,
    default_registry,
)
from reactive_typeahead.errors import ConfigurationError
from reactive_typeahead.forms import FormControl


def test_default_accessor_forwards_external_changes():
    control = FormControl("a")
    accessor = DefaultValueAccessor()
    seen = []
    accessor.register_control(control, on_change=seen.append)

    control.value = "b"

    assert accessor.view_value == "b"
    assert seen == ["b"]


def test_update_model_does_not_echo():
    control = FormControl()
    accessor = DefaultValueAccessor()
    seen = []
    accessor.register_control(control, on_change=seen.append)

    accessor.update_model("picked")

    assert control.value == "picked"
    assert control.dirty
    assert seen == []


def test_update_model_without_control_raises():
    with pytest.raises(ConfigurationError):
        DefaultValueAccessor().update_model("x")


def test_dispose_stops_forwarding():
    control = FormControl()
    accessor = DefaultValueAccessor()
    seen = []
    accessor.register_control(control, on_change=seen.append)

    accessor.dispose()
    control.value = 1

    assert accessor.control is None
    assert seen == []


def test_register_again_releases_previous_control():
    first = FormControl()
    second = FormControl()
    accessor = DefaultValueAccessor()
    seen = []
    accessor.register_control(first, on_change=seen.append)
    accessor.register_control(second, on_change=seen.append)

    first.value = "ignored"
    second.value = "seen"

    assert seen == ["seen"]


def test_int_accessor_converts_both_ways():
    control = FormControl(7)
    accessor = IntValueAccessor()
    accessor.register_control(control)

    assert accessor.view_value == "7"

    accessor.update_model(" 12 ")
    assert control.value == 12

    accessor.update_model("twelve")
    assert control.value is None


def test_float_accessor():
    accessor = FloatValueAccessor()

    assert accessor.model_to_view_value(None) == ""
    assert accessor.view_to_model_value("2.5") == 2.5
    assert accessor.view_to_model_value("") is None


def test_datetime_accessor_uses_iso_format():
    accessor = DateTimeValueAccessor()
    moment = datetime(2024, 5, 1, 13, 30)

    assert accessor.model_to_view_value(moment) == "2024-05-01T13:30:00"
    assert accessor.view_to_model_value("2024-05-01T13:30:00") == moment
    assert accessor.view_to_model_value("yesterday") is None


def test_time_accessor():
    accessor = TimeValueAccessor()

    assert accessor.model_to_view_value(time(9, 5)) == "09:05"
    assert accessor.view_to_model_value("18:45") == time(18, 45)
    assert accessor.view_to_model_value("noon") is None


def test_default_registry_tags():
    registry = default_registry()

    assert registry.tags() == ["datetime", "default", "float", "int", "time"]
    assert isinstance(registry.create("int"), IntValueAccessor)
    assert registry.create("int") is not registry.create("int")


def test_registry_unknown_tag_raises():
    with pytest.raises(ConfigurationError, match="Unknown value type 'money'"):
        default_registry().create("money")


def test_registry_register_custom_accessor():
    registry = ValueAccessorRegistry()
    registry.register("upper", DefaultValueAccessor)

    assert "upper" in registry
    assert "int" not in registry
