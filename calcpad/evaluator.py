"""Expression evaluation with operator precedence.

A flat token list (numbers interleaved with binary operators) is reduced with
two stacks, one for operands and one for pending operators. Before an operator
is pushed, every pending operator of greater or equal precedence is applied,
which gives left-to-right evaluation within a precedence level.

Bounds are checked once, on the final result, using the display limits.
"""

from __future__ import annotations

import math
from numbers import Real

from calcpad.config import MAX_SCIENTIFIC, MIN_SCIENTIFIC
from calcpad.errors import DivisionByZero, InvalidOperation, Overflow, Underflow
from calcpad.models import Operator, Token


def _is_number(token: object) -> bool:
    return isinstance(token, Real) and not isinstance(token, bool)


def _validate(tokens: list[Token]) -> None:
    """Reject anything that is not number (operator number)*.

    Raises:
        InvalidOperation: the sequence is malformed.
    """
    if len(tokens) % 2 == 0:
        raise InvalidOperation()
    for i, token in enumerate(tokens):
        if i % 2 == 0:
            if isinstance(token, Operator) or not _is_number(token):
                raise InvalidOperation()
            if not math.isfinite(token):
                raise InvalidOperation()
        elif not isinstance(token, Operator):
            raise InvalidOperation()


def apply_operator(left: float, right: float, op: Operator) -> float:
    """Apply one binary operator.

    Raises:
        DivisionByZero: op is DIVIDE and right is exactly zero.
        InvalidOperation: op is not an Operator.
    """
    if op is Operator.ADD:
        return left + right
    if op is Operator.SUBTRACT:
        return left - right
    if op is Operator.MULTIPLY:
        return left * right
    if op is Operator.DIVIDE:
        if right == 0:
            raise DivisionByZero()
        return left / right
    raise InvalidOperation()


def check_bounds(result: float) -> float:
    """Return result unchanged if the display can show it.

    Raises:
        Overflow: result is non-finite or above the display maximum.
        Underflow: result is nonzero and below the display minimum.
    """
    if not math.isfinite(result):
        raise Overflow()
    if result != 0 and abs(result) < MIN_SCIENTIFIC:
        raise Underflow()
    if abs(result) > MAX_SCIENTIFIC:
        raise Overflow()
    return result


def _reduce(operands: list[float], operators: list[Operator]) -> None:
    op = operators.pop()
    right = operands.pop()
    left = operands.pop()
    operands.append(apply_operator(left, right, op))


def evaluate(tokens: list[Token]) -> float:
    """Evaluate a token list such as [2.0, Operator.ADD, 3.0].

    An empty list evaluates to 0.0 and a single number to itself.

    Raises:
        InvalidOperation: tokens do not alternate number/operator, start or
            end on an operator, or contain a non-finite number.
        DivisionByZero, Overflow, Underflow: as in apply_operator and
            check_bounds.
    """
    if not tokens:
        return 0.0

    _validate(tokens)

    if len(tokens) == 1:
        return float(tokens[0])

    operands: list[float] = []
    operators: list[Operator] = []

    for token in tokens:
        if isinstance(token, Operator):
            while operators and operators[-1].precedence >= token.precedence:
                _reduce(operands, operators)
            operators.append(token)
        else:
            operands.append(float(token))

    while operators:
        _reduce(operands, operators)

    if len(operands) != 1:
        raise InvalidOperation()

    return check_bounds(operands[0])


def calculate(left: float, right: float, op: Operator) -> float:
    """Apply a single operator and bounds-check the result."""
    return check_bounds(apply_operator(left, right, op))


def add(a: float, b: float) -> float:
    return calculate(a, b, Operator.ADD)


def subtract(a: float, b: float) -> float:
    return calculate(a, b, Operator.SUBTRACT)


def multiply(a: float, b: float) -> float:
    return calculate(a, b, Operator.MULTIPLY)


def divide(a: float, b: float) -> float:
    return calculate(a, b, Operator.DIVIDE)
