"""Tests for precedence evaluation of token lists."""

import math

import pytest

from calcpad.errors import DivisionByZero, InvalidOperation, Overflow, Underflow
from calcpad.evaluator import add, calculate, divide, evaluate, multiply, subtract
from calcpad.models import Operator

ADD = Operator.ADD
SUB = Operator.SUBTRACT
MUL = Operator.MULTIPLY
DIV = Operator.DIVIDE


# --- Degenerate inputs ---

def test_empty_is_zero():
    assert evaluate([]) == 0


def test_single_number_is_itself():
    assert evaluate([42.5]) == 42.5


def test_single_number_skips_bounds_check():
    assert evaluate([1e20]) == 1e20


# --- Basic arithmetic ---

def test_addition():
    assert evaluate([2.0, ADD, 3.0]) == pytest.approx(5.0)


def test_subtraction():
    assert evaluate([10.0, SUB, 4.0]) == pytest.approx(6.0)


def test_multiplication():
    assert evaluate([3.0, MUL, 7.0]) == pytest.approx(21.0)


def test_division():
    assert evaluate([15.0, DIV, 4.0]) == pytest.approx(3.75)


def test_integers_accepted():
    assert evaluate([2, ADD, 3]) == 5


# --- Precedence and associativity ---

def test_multiplication_before_addition():
    """2 + 3 × 4 is 14, not 20."""
    assert evaluate([2.0, ADD, 3.0, MUL, 4.0]) == 14


def test_division_before_subtraction():
    assert evaluate([10.0, SUB, 8.0, DIV, 2.0]) == 6


def test_mixed_chain():
    assert evaluate([2.0, ADD, 3.0, MUL, 4.0, SUB, 5.0]) == 9


def test_subtraction_is_left_associative():
    """10 - 4 - 3 is 3, not 9."""
    assert evaluate([10.0, SUB, 4.0, SUB, 3.0]) == 3


def test_division_is_left_associative():
    """100 ÷ 10 ÷ 5 is 2, not 50."""
    assert evaluate([100.0, DIV, 10.0, DIV, 5.0]) == 2


def test_multiplication_then_division():
    assert evaluate([6.0, MUL, 4.0, DIV, 3.0, ADD, 1.0]) == 9


# --- Errors ---

@pytest.mark.parametrize("a", [0.0, 1.0, -7.5, 1e10])
def test_division_by_zero(a):
    with pytest.raises(DivisionByZero) as e:
        evaluate([a, DIV, 0.0])
    assert e.value.message == "Cannot divide by zero"


def test_division_by_zero_mid_expression():
    with pytest.raises(DivisionByZero):
        evaluate([1.0, ADD, 5.0, DIV, 0.0, MUL, 3.0])


def test_overflow():
    with pytest.raises(Overflow):
        evaluate([1e16, MUL, 1e16])


def test_underflow():
    with pytest.raises(Underflow):
        evaluate([1e-16, DIV, 1e16])


def test_intermediate_infinity_is_overflow():
    with pytest.raises(Overflow):
        evaluate([1e300, MUL, 1e300, SUB, 1.0])


def test_bounds_checked_on_final_result_only():
    """The intermediate 1e20 is out of range but the final result is not."""
    assert evaluate([1e10, MUL, 1e10, DIV, 1e10]) == pytest.approx(1e10)


def test_zero_result_is_not_underflow():
    assert evaluate([5.0, SUB, 5.0]) == 0


# --- Malformed input ---

@pytest.mark.parametrize("tokens", [
    [ADD],
    [ADD, 1.0],
    [1.0, ADD],
    [1.0, 2.0],
    [1.0, ADD, ADD, 2.0],
    [1.0, "+", 2.0],
    [math.nan, ADD, 1.0],
    [True, ADD, 1.0],
])
def test_malformed_sequences_rejected(tokens):
    with pytest.raises(InvalidOperation):
        evaluate(tokens)


# --- Single operations ---

def test_calculate_single_operator():
    assert calculate(6.0, 3.0, DIV) == 2


def test_convenience_operations():
    assert add(1.0, 2.0) == 3
    assert subtract(1.0, 2.0) == -1
    assert multiply(1.5, 2.0) == 3
    assert divide(1.0, 4.0) == 0.25


def test_convenience_bounds_checked():
    with pytest.raises(Overflow):
        multiply(1e10, 1e10)
    with pytest.raises(DivisionByZero):
        divide(1.0, 0.0)
