import pytest

from odilia.command import (
    CaretPos,
    CommandType,
    Focus,
    Priority,
    SetState,
    Speak,
    command_type,
    into_commands,
    try_into_commands,
)
from odilia.errors import NoItem, OdiliaError
from odilia.primitive import AccessiblePrimitive

ITEM = AccessiblePrimitive(sender=":1.1", id="/org/a11y/atspi/accessible/root")


def test_single_commands_become_one_element():
    for cmd in (CaretPos(3), Focus(ITEM), SetState(ITEM, "focused", True)):
        assert list(into_commands(cmd)) == [cmd]


def test_priority_text_pair_becomes_speak():
    assert list(into_commands((Priority.Text, "hello"))) == [Speak("hello", Priority.Text)]


def test_empty_tuple_gives_no_commands():
    assert list(into_commands(())) == []


def test_list_of_commands_kept_in_order():
    cmds = [CaretPos(1), Focus(ITEM), CaretPos(2)]
    assert list(into_commands(cmds)) == cmds


def test_tuples_chain_in_order():
    value = (CaretPos(1), (Priority.Message, "msg"), (), [Focus(ITEM)])
    assert list(into_commands(value)) == [
        CaretPos(1),
        Speak("msg", Priority.Message),
        Focus(ITEM),
    ]


def test_one_tuple_is_its_element():
    assert list(into_commands((CaretPos(4),))) == [CaretPos(4)]


def test_list_with_non_command_rejected():
    with pytest.raises(TypeError):
        into_commands([CaretPos(1), "text"])


def test_unknown_value_rejected():
    with pytest.raises(TypeError):
        into_commands(42)


def test_try_into_commands_passes_values_through():
    assert list(try_into_commands((Priority.Important, "x"))) == [
        Speak("x", Priority.Important)
    ]


def test_try_into_commands_raises_odilia_error_as_is():
    error = NoItem()
    with pytest.raises(NoItem) as info:
        try_into_commands(error)
    assert info.value is error


def test_try_into_commands_wraps_other_errors():
    with pytest.raises(OdiliaError) as info:
        try_into_commands(ValueError("bad"))
    assert str(info.value) == "bad"
    assert isinstance(info.value.__cause__, ValueError)


def test_command_type_of_each_command():
    assert command_type(Speak("a", Priority.Text)) is CommandType.Speak
    assert command_type(Focus(ITEM)) is CommandType.Focus
    assert command_type(CaretPos(0)) is CommandType.CaretPos
    assert command_type(SetState(ITEM, "focused", False)) is CommandType.SetState


def test_command_types_ordered_as_declared():
    found = [
        command_type(SetState(ITEM, "focused", True)),
        command_type(Speak("a", Priority.Text)),
        command_type(CaretPos(0)),
    ]
    assert sorted(found) == [
        CommandType.Speak,
        CommandType.CaretPos,
        CommandType.SetState,
    ]
    assert str(command_type(Focus(ITEM))) == "Focus"


def test_command_type_rejects_non_command():
    with pytest.raises(TypeError):
        command_type("Speak")


def test_negative_caret_position_rejected():
    with pytest.raises(ValueError):
        CaretPos(-1)