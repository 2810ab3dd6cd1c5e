"""Keyboard-to-action mapping.

Keys are plain strings as typed at the prompt: single characters for digits
and operators, short words for the rest ("enter", "esc", "mr", "m+").
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from calcpad.calculator import Calculator
from calcpad.models import Operator


class Action(str, Enum):
    """Calculator actions a key can trigger."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EQUALS = "equals"
    CLEAR = "clear"
    ALL_CLEAR = "all-clear"
    BACKSPACE = "backspace"
    MEMORY_RECALL = "memory-recall"
    MEMORY_ADD = "memory-add"
    MEMORY_SUBTRACT = "memory-subtract"
    MEMORY_CLEAR = "memory-clear"


KEY_MAPPINGS: dict[str, Action] = {
    **{d: Action.DIGIT for d in "0123456789"},
    ".": Action.DECIMAL,
    ",": Action.DECIMAL,
    "+": Action.ADD,
    "-": Action.SUBTRACT,
    "−": Action.SUBTRACT,
    "*": Action.MULTIPLY,
    "x": Action.MULTIPLY,
    "×": Action.MULTIPLY,
    "/": Action.DIVIDE,
    "÷": Action.DIVIDE,
    "=": Action.EQUALS,
    "enter": Action.EQUALS,
    "esc": Action.CLEAR,
    "escape": Action.CLEAR,
    "c": Action.CLEAR,
    "C": Action.ALL_CLEAR,
    "ac": Action.ALL_CLEAR,
    "AC": Action.ALL_CLEAR,
    "backspace": Action.BACKSPACE,
    "bs": Action.BACKSPACE,
    "del": Action.BACKSPACE,
    "delete": Action.BACKSPACE,
    "mr": Action.MEMORY_RECALL,
    "m+": Action.MEMORY_ADD,
    "m-": Action.MEMORY_SUBTRACT,
    "mc": Action.MEMORY_CLEAR,
}

_OPERATORS = {
    Action.ADD: Operator.ADD,
    Action.SUBTRACT: Operator.SUBTRACT,
    Action.MULTIPLY: Operator.MULTIPLY,
    Action.DIVIDE: Operator.DIVIDE,
}


def resolve(key: str) -> Optional[Action]:
    """Map a key to its action, None if the key is not bound.

    Single characters are case-sensitive ("c" clears the entry, "C" clears
    all); longer names are matched case-insensitively.
    """
    if key in KEY_MAPPINGS:
        return KEY_MAPPINGS[key]
    if len(key) > 1:
        return KEY_MAPPINGS.get(key.lower())
    return None


def dispatch(calculator: Calculator, key: str) -> bool:
    """Apply one key to the calculator. Returns False if the key is not bound."""
    action = resolve(key)
    if action is None:
        return False

    if action is Action.DIGIT:
        calculator.input_digit(key)
    elif action is Action.DECIMAL:
        calculator.input_decimal()
    elif action in _OPERATORS:
        calculator.input_operator(_OPERATORS[action])
    elif action is Action.EQUALS:
        calculator.calculate()
    elif action is Action.CLEAR:
        calculator.clear()
    elif action is Action.ALL_CLEAR:
        calculator.all_clear()
    elif action is Action.BACKSPACE:
        calculator.backspace()
    elif action is Action.MEMORY_RECALL:
        calculator.memory_recall()
    elif action is Action.MEMORY_ADD:
        calculator.memory_add()
    elif action is Action.MEMORY_SUBTRACT:
        calculator.memory_subtract()
    elif action is Action.MEMORY_CLEAR:
        calculator.memory_clear()
    return True


def split_keys(text: str) -> list[str]:
    """Split typed input into keys.

    Whitespace-separated words that are bound as a whole ("m+", "enter") are
    kept; anything else is split into characters, so "12+3=" works as well
    as "1 2 + 3 =".
    """
    keys: list[str] = []
    for word in text.split():
        if len(word) > 1 and resolve(word) is not None:
            keys.append(word)
        else:
            keys.extend(word)
    return keys
