import pytest

from odilia.modes import ScreenReaderMode


def test_focus_has_fixed_value():
    assert ScreenReaderMode(1) is ScreenReaderMode.Focus


def test_browse_has_fixed_value():
    assert ScreenReaderMode(2) is ScreenReaderMode.Browse


@pytest.mark.parametrize("mode", list(ScreenReaderMode))
def test_lookup_by_value_round_trips(mode):
    assert ScreenReaderMode(mode.value) is mode


@pytest.mark.parametrize("mode", list(ScreenReaderMode))
def test_lookup_by_name_round_trips(mode):
    assert ScreenReaderMode(ScreenReaderMode[mode.name].value) is mode


def test_unknown_value_is_rejected():
    with pytest.raises(ValueError):
        ScreenReaderMode(0)