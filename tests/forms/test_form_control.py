from reactive_typeahead.forms import (
    ControlStatus,
    FocusController,
    FormControl,
    StatusChanged,
    TouchedChanged,
    ValidationMessage,
    Validators,
    ValueChanged,
)


def test_new_control_runs_validators_without_publishing():
    control = FormControl(validators=[Validators.required])
    received = []
    control.events.subscribe(StatusChanged, received.append)

    assert control.invalid
    assert control.errors == {ValidationMessage.required: True}
    assert received == []


def test_set_value_publishes_value_and_status():
    control = FormControl(validators=[Validators.required])
    values = []
    statuses = []
    control.events.subscribe(ValueChanged, lambda event: values.append(event.value))
    control.events.subscribe(StatusChanged, lambda event: statuses.append(event.status))

    control.value = "Lisbon"

    assert values == ["Lisbon"]
    assert statuses == [ControlStatus.VALID]
    assert control.valid


def test_status_not_republished_when_unchanged():
    control = FormControl("a", validators=[Validators.required])
    statuses = []
    control.events.subscribe(StatusChanged, statuses.append)

    control.value = "b"
    control.value = "c"

    assert statuses == []


def test_update_value_without_event_is_silent():
    control = FormControl()
    values = []
    control.events.subscribe(ValueChanged, values.append)

    control.update_value(3, emit_event=False)

    assert control.value == 3
    assert values == []


def test_touched_published_once():
    control = FormControl()
    events = []
    control.events.subscribe(TouchedChanged, lambda event: events.append(event.touched))

    control.mark_as_touched()
    control.mark_as_touched()
    control.mark_as_untouched()

    assert events == [True, False]


def test_dirty_and_pristine():
    control = FormControl()
    assert control.pristine

    control.mark_as_dirty()
    assert control.dirty

    control.mark_as_pristine()
    assert control.pristine


def test_disable_clears_errors_and_sets_status():
    control = FormControl(validators=[Validators.required])

    control.disable()

    assert control.disabled
    assert control.status == ControlStatus.DISABLED
    assert control.errors == {}

    control.enable()
    assert control.invalid


def test_disable_publishes_status_only():
    control = FormControl("Porto", validators=[Validators.required])
    values = []
    statuses = []
    control.events.subscribe(ValueChanged, values.append)
    control.events.subscribe(StatusChanged, statuses.append)

    control.disable()

    assert values == []
    assert [event.status for event in statuses] == [ControlStatus.DISABLED]
    assert control.value == "Porto"

    control.enable()

    assert [event.value for event in values] == ["Porto"]
    assert statuses[-1].status == ControlStatus.VALID


def test_reset_restores_untouched_pristine_state():
    control = FormControl("x", validators=[Validators.required])
    control.mark_as_touched()
    control.mark_as_dirty()

    control.reset()

    assert control.value is None
    assert not control.touched
    assert control.pristine
    assert control.invalid


def test_set_errors_manually():
    control = FormControl("taken")

    control.set_errors({"unique": {"value": "taken"}})

    assert control.invalid
    assert control.has_error("unique")
    assert control.error("unique") == {"value": "taken"}


def test_register_focus_controller_skips_duplicates():
    control = FormControl()
    controller = FocusController()

    control.register_focus_controller(controller)
    control.register_focus_controller(controller)

    assert control.focus_controllers == (controller,)

    control.unregister_focus_controller(controller)
    control.unregister_focus_controller(controller)
    assert control.focus_controllers == ()


def test_focus_uses_last_registered_controller(fake_widget):
    control = FormControl()
    first = FocusController()
    second = FocusController()
    second.focus_node.attach(fake_widget)
    control.register_focus_controller(first)
    control.register_focus_controller(second)

    control.focus()

    assert fake_widget.focus_calls == 1


def test_has_focus_follows_registered_nodes(fake_widget):
    control = FormControl()
    controller = FocusController()
    controller.focus_node.attach(fake_widget)
    control.register_focus_controller(controller)

    controller.focus_node.notify_focus(True)
    assert control.has_focus

    controller.focus_node.notify_focus(False)
    assert not control.has_focus
