import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from odilia.events import (
    ChangeMode,
    Direction,
    Disable,
    Enable,
    Feature,
    Quit,
    ScreenReaderEventType,
    StopSpeech,
    StructuralNavigation,
    event_type,
    from_json,
    to_json,
)
from odilia.modes import ScreenReaderMode
from odilia.roles import Role

events = st.one_of(
    st.just(StopSpeech()),
    st.builds(Enable, st.sampled_from(list(Feature))),
    st.builds(Disable, st.sampled_from(list(Feature))),
    st.builds(ChangeMode, st.sampled_from(list(ScreenReaderMode))),
    st.builds(
        StructuralNavigation,
        st.sampled_from(list(Direction)),
        st.sampled_from(list(Role)),
    ),
    st.just(Quit()),
)


def test_stop_speech_json():
    assert to_json(StopSpeech()) == '{"StopSpeech":null}'


def test_change_mode_json():
    assert to_json(ChangeMode(ScreenReaderMode.Browse)) == '{"ChangeMode":"Browse"}'


def test_structural_navigation_carries_tagged_direction():
    data = json.loads(to_json(StructuralNavigation(Direction.Backward, Role.Table)))
    assert data["StructuralNavigation"] == [{"direction": "Backward"}, "Table"]


@given(events)
def test_json_round_trip(event):
    assert from_json(to_json(event)) == event


@given(events)
def test_event_type_matches_class(event):
    assert event_type(event).name == type(event).__name__


def test_event_types_are_ordered_as_declared():
    stop = event_type(StopSpeech())
    enable = event_type(Enable(Feature.Speech))
    quit_ = event_type(Quit())
    assert stop < enable < quit_
    assert [stop, enable, quit_] == [
        ScreenReaderEventType.StopSpeech,
        ScreenReaderEventType.Enable,
        ScreenReaderEventType.Quit,
    ]


def test_event_type_display_is_its_name():
    nav = StructuralNavigation(Direction.Forward, Role.Link)
    assert str(event_type(nav)) == "StructuralNavigation"


def test_event_type_of_non_event_raises():
    with pytest.raises(TypeError):
        event_type("StopSpeech")


@pytest.mark.parametrize(
    "text",
    [
        '{"Nope":null}',
        '{"ChangeMode":"Sideways"}',
        '{"StopSpeech":null,"Quit":null}',
        '{"StructuralNavigation":["Forward","Table"]}',
        '{"Enable":3}',
        "[]",
        "not json",
    ],
)
def test_invalid_json_raises(text):
    with pytest.raises(ValueError):
        from_json(text)