import pytest
from rich.text import Text

from reactive_typeahead.typeahead import (
    STATUS_ROW,
    Direction,
    SuggestionsBoxController,
    SuggestionsConfig,
    SuggestionsPhase,
    SuggestionsSnapshot,
    build_options,
    choose_direction,
    should_show_dropdown,
)


def prompts(pairs):
    return [str(option.prompt) for option, _ in pairs]


def test_loaded_items_become_selectable_options():
    snapshot = SuggestionsSnapshot(SuggestionsPhase.LOADED, "p", ("Porto", "Paris"))

    pairs = build_options(snapshot, SuggestionsConfig(), str.upper)

    assert prompts(pairs) == ["PORTO", "PARIS"]
    assert [item for _, item in pairs] == ["Porto", "Paris"]
    assert not any(option.disabled for option, _ in pairs)


def test_none_is_an_ordinary_item():
    snapshot = SuggestionsSnapshot(SuggestionsPhase.LOADED, "p", (None, "Porto"))

    pairs = build_options(snapshot, SuggestionsConfig(), str)

    assert [item for _, item in pairs] == [None, "Porto"]
    assert not pairs[0][0].disabled


@pytest.mark.parametrize(
    "snapshot, expected",
    [
        (SuggestionsSnapshot(SuggestionsPhase.LOADING, "p"), "Loading..."),
        (SuggestionsSnapshot(SuggestionsPhase.EMPTY, "p"), "No Items Found!"),
        (SuggestionsSnapshot(SuggestionsPhase.ERROR, "p", (), ValueError("nope")), "Error: nope"),
    ],
)
def test_status_rows_are_disabled(snapshot, expected):
    pairs = build_options(snapshot, SuggestionsConfig(), str)

    assert prompts(pairs) == [expected]
    assert pairs[0][0].disabled
    assert pairs[0][1] is STATUS_ROW


def test_custom_status_builders():
    config = SuggestionsConfig(
        loading_builder=lambda: Text("wait"),
        no_items_found_builder=lambda: "nothing",
        error_builder=lambda error: f"failed: {type(error).__name__}",
    )

    assert prompts(build_options(SuggestionsSnapshot(SuggestionsPhase.LOADING), config, str)) == ["wait"]
    assert prompts(build_options(SuggestionsSnapshot(SuggestionsPhase.EMPTY), config, str)) == ["nothing"]
    error = SuggestionsSnapshot(SuggestionsPhase.ERROR, "", (), KeyError("k"))
    assert prompts(build_options(error, config, str)) == ["failed: KeyError"]


def test_loading_keeps_previous_items_as_options():
    snapshot = SuggestionsSnapshot(SuggestionsPhase.LOADING, "po", ("Porto",))

    assert prompts(build_options(snapshot, SuggestionsConfig(), str)) == ["Porto"]
    no_keep = SuggestionsConfig(keep_suggestions_on_loading=False)
    assert prompts(build_options(snapshot, no_keep, str)) == ["Loading..."]


def test_idle_has_no_options():
    assert build_options(SuggestionsSnapshot(), SuggestionsConfig(), str) == []


def test_dropdown_hidden_without_focus():
    snapshot = SuggestionsSnapshot(SuggestionsPhase.LOADED, "a", ("a",))

    assert not should_show_dropdown(snapshot, SuggestionsConfig(), has_focus=False)
    assert should_show_dropdown(snapshot, SuggestionsConfig(hide_suggestions_on_blur=False), has_focus=False)


@pytest.mark.parametrize(
    "phase, flag",
    [
        (SuggestionsPhase.LOADING, "hide_on_loading"),
        (SuggestionsPhase.EMPTY, "hide_on_empty"),
        (SuggestionsPhase.ERROR, "hide_on_error"),
    ],
)
def test_hide_flags(phase, flag):
    snapshot = SuggestionsSnapshot(phase, "a")

    assert should_show_dropdown(snapshot, SuggestionsConfig(), has_focus=True)
    assert not should_show_dropdown(snapshot, SuggestionsConfig(**{flag: True}), has_focus=True)


def test_idle_never_shows():
    assert not should_show_dropdown(SuggestionsSnapshot(), SuggestionsConfig(), has_focus=True)


def test_choose_direction_keeps_preferred_when_it_fits():
    assert choose_direction(Direction.DOWN, auto_flip=True, box_height=5, space_above=2, space_below=10) is Direction.DOWN


def test_choose_direction_flips_when_other_side_has_more_room():
    assert choose_direction(Direction.DOWN, auto_flip=True, box_height=8, space_above=20, space_below=3) is Direction.UP
    assert choose_direction(Direction.UP, auto_flip=True, box_height=8, space_above=1, space_below=12) is Direction.DOWN


def test_choose_direction_without_auto_flip():
    assert choose_direction(Direction.DOWN, auto_flip=False, box_height=8, space_above=20, space_below=3) is Direction.DOWN


def test_config_validation():
    with pytest.raises(ValueError):
        SuggestionsConfig(debounce_duration=-1)
    with pytest.raises(ValueError):
        SuggestionsConfig(animation_start=1.5)


class FakeBox:
    def __init__(self):
        self.is_open = False
        self.realigned = 0

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def realign(self):
        self.realigned += 1


def test_box_controller_drives_attached_box():
    controller = SuggestionsBoxController()
    box = FakeBox()

    controller.open()
    assert not controller.is_opened

    controller.attach(box)
    controller.toggle()
    assert box.is_open
    controller.toggle()
    assert not box.is_open
    controller.resize()
    assert box.realigned == 1

    controller.detach(object())
    assert controller.is_attached
    controller.detach(box)
    assert not controller.is_attached
