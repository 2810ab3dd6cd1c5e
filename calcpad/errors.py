"""Calculator error taxonomy.

Every error carries a short user-visible message; the calculator shows it on
the display verbatim when it enters the ERROR phase.
"""

from __future__ import annotations


class CalculatorError(Exception):
    """Base class for all calculator failures."""

    default_message = "Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(CalculatorError):
    """A malformed digit or operator was supplied to the calculator."""

    default_message = "Invalid input"


class DivisionByZero(CalculatorError):
    default_message = "Cannot divide by zero"


class Overflow(CalculatorError):
    default_message = "Overflow"


class Underflow(CalculatorError):
    default_message = "Underflow"


class InvalidOperation(CalculatorError):
    """The token sequence handed to the evaluator is malformed."""

    default_message = "Invalid operation"
