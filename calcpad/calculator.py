"""Calculator input state machine.

Key events (digits, decimal point, operators, equals, clears, backspace and
the memory keys) each map to one method. Operators are only queued; the
whole expression is handed to the evaluator when equals is pressed, so
precedence is resolved there rather than as keys arrive.

Phases:
    INITIAL            fresh or after clearing an error
    OPERAND_ENTRY      an operand is being typed
    OPERATOR_SELECTED  an operator was just chosen
    RESULT_DISPLAYED   the last equals succeeded
    ERROR              the last equals failed; the display shows the message
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Union

from calcpad.errors import CalculatorError, InvalidInput
from calcpad.evaluator import evaluate
from calcpad.events import Calculation, ErrorRaised, Signal, StateChange, Unsubscribe
from calcpad.formatter import format_expression, format_number, plain_decimal
from calcpad.memory import MemoryRegister
from calcpad.models import CalculatorState, Operator, Phase

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class Calculator:
    """One calculator session: state, memory and listeners."""

    def __init__(self, memory: Optional[MemoryRegister] = None) -> None:
        self.state = CalculatorState()
        self.memory = memory if memory is not None else MemoryRegister()
        self._state_changed: Signal[StateChange] = Signal()
        self._calculated: Signal[Calculation] = Signal()
        self._errored: Signal[ErrorRaised] = Signal()

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def input_digit(self, digit: str) -> None:
        """Append a digit 0-9 to the operand, or start a new one."""
        if not isinstance(digit, str) or len(digit) != 1 or digit not in DIGITS:
            self._reject(InvalidInput(f"Invalid digit: {digit!r}"))
            return

        self._leave_error()
        s = self.state
        if s.reset_on_next_digit:
            s.current_operand = digit
            s.reset_on_next_digit = False
        elif s.current_operand == "0":
            s.current_operand = digit
        else:
            s.current_operand += digit
        s.phase = Phase.OPERAND_ENTRY
        self._emit_state_change()

    def input_decimal(self) -> None:
        """Add a decimal point; a second point in the same operand is ignored."""
        self._leave_error()
        s = self.state
        if s.reset_on_next_digit:
            s.current_operand = "0."
            s.reset_on_next_digit = False
        elif "." not in s.current_operand:
            s.current_operand += "."
        s.phase = Phase.OPERAND_ENTRY
        self._emit_state_change()

    def input_operator(self, operator: Union[str, Operator]) -> None:
        """Queue an operator after the current operand.

        Choosing another operator straight away replaces the queued one.
        """
        try:
            op = Operator.from_symbol(operator)
        except InvalidInput as exc:
            self._reject(exc)
            return

        self._leave_error()
        s = self.state
        if (
            s.phase is Phase.OPERATOR_SELECTED
            and s.expression
            and isinstance(s.expression[-1], Operator)
        ):
            s.expression[-1] = op
        else:
            s.expression.append(self._operand_value())
            s.expression.append(op)
        s.last_operator = op
        s.reset_on_next_digit = True
        s.phase = Phase.OPERATOR_SELECTED
        self._emit_state_change()

    # ------------------------------------------------------------------
    # Equals
    # ------------------------------------------------------------------

    def calculate(self) -> Optional[float]:
        """Evaluate the queued expression.

        Returns the result, or None when there was nothing to evaluate or the
        evaluation failed (the state then carries the error message).
        """
        s = self.state
        if s.phase is Phase.ERROR:
            return None

        if self._operand_pending():
            s.expression.append(self._operand_value())

        if not s.expression:
            return None

        tokens = list(s.expression)
        try:
            result = evaluate(tokens)
        except CalculatorError as exc:
            self._fail(exc)
            return None

        s.last_result = result
        s.current_operand = format_number(result)
        s.expression = []
        s.last_operator = None
        s.phase = Phase.RESULT_DISPLAYED
        s.reset_on_next_digit = True

        self._calculated.emit(Calculation(result=result, expression=tokens))
        self._emit_state_change()
        return result

    # ------------------------------------------------------------------
    # Clearing
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Clear the current entry (C). Clearing an error starts over."""
        s = self.state
        s.current_operand = "0"
        s.error = None
        if s.phase is Phase.ERROR:
            s.phase = Phase.INITIAL
            s.expression = []
            s.last_operator = None
            s.reset_on_next_digit = False
        self._emit_state_change()

    def all_clear(self) -> None:
        """Reset everything except memory (AC)."""
        self.state.reset()
        self._emit_state_change()

    def backspace(self) -> None:
        """Remove the last typed character. Ignored on a result or error."""
        s = self.state
        if s.phase not in (Phase.RESULT_DISPLAYED, Phase.ERROR):
            text = s.current_operand
            if "e" in text.lower():
                text = plain_decimal(self._operand_value())
            text = text[:-1]
            s.current_operand = text if text not in ("", "-") else "0"
        self._emit_state_change()

    # ------------------------------------------------------------------
    # Memory
    # ------------------------------------------------------------------

    def memory_add(self) -> None:
        value = self._parse_operand()
        if value is not None:
            self.memory.add(value)
            self._emit_state_change()

    def memory_subtract(self) -> None:
        value = self._parse_operand()
        if value is not None:
            self.memory.subtract(value)
            self._emit_state_change()

    def memory_recall(self) -> None:
        """Show the memory value as the operand; the next digit replaces it."""
        self._leave_error()
        s = self.state
        # Plain digits: the operand stays a numeral under backspace
        s.current_operand = plain_decimal(self.memory.recall())
        s.reset_on_next_digit = True
        s.phase = Phase.OPERAND_ENTRY
        self._emit_state_change()

    def memory_clear(self) -> None:
        self.memory.clear()
        self._emit_state_change()

    def has_memory(self) -> bool:
        return self.memory.has_value()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def get_display_value(self) -> str:
        """The main display: the error message, or the formatted operand.

        An operand still being typed is shown as typed so a trailing point
        or trailing zeros stay visible.
        """
        s = self.state
        if s.error:
            return s.error
        if s.phase is Phase.OPERAND_ENTRY and not s.reset_on_next_digit:
            return s.current_operand
        return format_number(s.current_operand)

    def get_expression_display(self) -> str:
        return format_expression(self.state.expression)

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def snapshot(self) -> StateChange:
        return StateChange(
            display_value=self.get_display_value(),
            expression_display=self.get_expression_display(),
            has_memory=self.has_memory(),
            phase=self.state.phase,
        )

    def restore(self, state: CalculatorState) -> None:
        """Replace the session state, e.g. with one loaded from storage."""
        try:
            valid = math.isfinite(float(state.current_operand))
        except ValueError:
            valid = False
        if not valid:
            state.current_operand = "0"
        self.state = state
        self._emit_state_change()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_state_change(self, callback: Callable[[StateChange], None]) -> Unsubscribe:
        return self._state_changed.subscribe(callback)

    def on_calculation(self, callback: Callable[[Calculation], None]) -> Unsubscribe:
        return self._calculated.subscribe(callback)

    def on_error(self, callback: Callable[[ErrorRaised], None]) -> Unsubscribe:
        return self._errored.subscribe(callback)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _operand_pending(self) -> bool:
        """Whether the operand on display still has to join the expression.

        A recalled memory value counts even though the next digit replaces it.
        """
        s = self.state
        return not s.reset_on_next_digit or s.phase is Phase.OPERAND_ENTRY

    def _operand_value(self) -> float:
        return float(self.state.current_operand)

    def _parse_operand(self) -> Optional[float]:
        try:
            return float(self.state.current_operand)
        except ValueError:
            return None

    def _leave_error(self) -> None:
        """Drop a failed expression so new entry starts clean."""
        s = self.state
        if s.phase is Phase.ERROR:
            s.error = None
            s.expression = []
            s.last_operator = None
            s.phase = Phase.INITIAL

    def _fail(self, exc: CalculatorError) -> None:
        logger.debug("Evaluation failed: %s (tokens=%r)", exc.message, self.state.expression)
        s = self.state
        s.error = exc.message
        s.current_operand = "0"
        s.phase = Phase.ERROR
        s.reset_on_next_digit = True
        self._errored.emit(ErrorRaised(message=exc.message, error=exc))
        self._emit_state_change()

    def _reject(self, exc: InvalidInput) -> None:
        """Report bad input without touching the state."""
        logger.debug("Rejected input: %s", exc.message)
        self._errored.emit(ErrorRaised(message=exc.message, error=exc))

    def _emit_state_change(self) -> None:
        self._state_changed.emit(self.snapshot())
