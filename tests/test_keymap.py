"""Tests for key resolution and dispatch."""

import pytest

from calcpad.calculator import Calculator
from calcpad.keymap import Action, dispatch, resolve, split_keys
from calcpad.models import Phase


def run(keys):
    calc = Calculator()
    for key in split_keys(keys):
        assert dispatch(calc, key), f"unbound key {key!r}"
    return calc


@pytest.mark.parametrize("key, action", [
    ("7", Action.DIGIT),
    (",", Action.DECIMAL),
    ("*", Action.MULTIPLY),
    ("x", Action.MULTIPLY),
    ("/", Action.DIVIDE),
    ("Enter", Action.EQUALS),
    ("c", Action.CLEAR),
    ("C", Action.ALL_CLEAR),
    ("M+", Action.MEMORY_ADD),
    ("Backspace", Action.BACKSPACE),
])
def test_resolve(key, action):
    assert resolve(key) is action


def test_unknown_key():
    assert resolve("%") is None
    assert not dispatch(Calculator(), "%")


def test_split_keys_characters_and_words():
    assert split_keys("12+3=") == ["1", "2", "+", "3", "="]
    assert split_keys("5 m+ mr enter") == ["5", "m+", "mr", "enter"]


def test_ascii_operators_evaluate():
    assert run("2+3*4=").get_display_value() == "14"
    assert run("10-8/2=").get_display_value() == "6"


def test_clear_keys():
    calc = run("5/0=")
    assert calc.phase is Phase.ERROR
    dispatch(calc, "c")
    assert calc.phase is Phase.INITIAL
    assert calc.get_display_value() == "0"


def test_memory_keys():
    calc = run("12 m+ AC mr + 1 =")
    assert calc.get_display_value() == "13"
    dispatch(calc, "mc")
    assert not calc.has_memory()
