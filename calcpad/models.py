"""Data models for calcpad.

Operator and Phase enums, CalculatorState and HistoryEntry: the typed
structures that flow through calculator → history → storage → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from calcpad.errors import InvalidInput


class Operator(str, Enum):
    """Binary operators, valued by their display symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: Union[str, Operator]) -> Operator:
        """Look up an operator by symbol.

        Accepts the display symbols plus the typographic minus sign.

        Raises:
            InvalidInput: the symbol is not one of the four operators.
        """
        if isinstance(symbol, Operator):
            return symbol
        try:
            return cls(_SYMBOL_ALIASES.get(symbol, symbol))
        except ValueError:
            raise InvalidInput(f"Invalid operator: {symbol!r}") from None


_PRECEDENCE = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
}

_SYMBOL_ALIASES = {"−": "-"}

Token = Union[float, Operator]


class Phase(str, Enum):
    """Input state machine phases."""

    INITIAL = "initial"
    OPERAND_ENTRY = "operand_entry"
    OPERATOR_SELECTED = "operator_selected"
    RESULT_DISPLAYED = "result_displayed"
    ERROR = "error"


def tokens_to_json(tokens: list[Token]) -> list[Union[float, str]]:
    """Operators become their symbols, numbers stay numbers."""
    return [t.symbol if isinstance(t, Operator) else t for t in tokens]


def tokens_from_json(raw: list) -> list[Token]:
    tokens: list[Token] = []
    for item in raw:
        if isinstance(item, str):
            tokens.append(Operator.from_symbol(item))
        else:
            tokens.append(float(item))
    return tokens


@dataclass
class CalculatorState:
    """The mutable record behind one calculator session."""

    phase: Phase = Phase.INITIAL
    current_operand: str = "0"
    expression: list[Token] = field(default_factory=list)
    last_operator: Optional[Operator] = None
    last_result: Optional[float] = None
    error: Optional[str] = None
    reset_on_next_digit: bool = False

    def reset(self) -> None:
        """Return every field to its freshly constructed value."""
        fresh = CalculatorState()
        self.phase = fresh.phase
        self.current_operand = fresh.current_operand
        self.expression = fresh.expression
        self.last_operator = fresh.last_operator
        self.last_result = fresh.last_result
        self.error = fresh.error
        self.reset_on_next_digit = fresh.reset_on_next_digit

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "phase": self.phase.value,
            "current_operand": self.current_operand,
            "expression": tokens_to_json(self.expression),
            "last_operator": self.last_operator.symbol if self.last_operator else None,
            "last_result": self.last_result,
            "error": self.error,
            "reset_on_next_digit": self.reset_on_next_digit,
        }

    @classmethod
    def from_dict(cls, d: dict) -> CalculatorState:
        """Deserialize from a JSON dict (state.json).

        Raises:
            ValueError: a field holds an unknown phase or a non-numeric value.
            InvalidInput: a token or operator symbol is not recognised.
        """
        last_op = d.get("last_operator")
        last_result = d.get("last_result")
        error = d.get("error")
        phase = Phase(d.get("phase", Phase.INITIAL.value))
        # Keep the error/phase pair consistent even for hand-edited files
        if phase is Phase.ERROR and not error:
            phase = Phase.INITIAL
        if phase is not Phase.ERROR:
            error = None
        return cls(
            phase=phase,
            current_operand=str(d.get("current_operand") or "0"),
            expression=tokens_from_json(d.get("expression", [])),
            last_operator=Operator.from_symbol(last_op) if last_op else None,
            last_result=float(last_result) if last_result is not None else None,
            error=error,
            reset_on_next_digit=bool(d.get("reset_on_next_digit", False)),
        )


@dataclass
class HistoryEntry:
    """One successful calculation."""

    id: int
    timestamp: str
    expression: list[Token]
    expression_string: str
    result: float
    result_string: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "expression": tokens_to_json(self.expression),
            "expression_string": self.expression_string,
            "result": self.result,
            "result_string": self.result_string,
        }

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        """Deserialize from a JSON dict (history.json).

        Raises:
            KeyError, TypeError, ValueError, InvalidInput: the dict is not a
                history entry.
        """
        return cls(
            id=int(d["id"]),
            timestamp=str(d.get("timestamp", "")),
            expression=tokens_from_json(d.get("expression", [])),
            expression_string=str(d.get("expression_string", "")),
            result=float(d["result"]),
            result_string=str(d.get("result_string", "")),
        )
