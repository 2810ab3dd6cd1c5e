"""Number formatting for the calculator display.

Pure functions, no state. Values that fit the display are shown as plain
decimals; very large or very small magnitudes switch to scientific notation.
Nothing here raises: malformed or non-finite input renders as "Error".
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Optional, Union

from calcpad.config import DECIMAL_PLACES, MAX_DIGITS, MAX_SCIENTIFIC, MIN_SCIENTIFIC
from calcpad.models import Operator, Token

ERROR_TEXT = "Error"

# "1.5000000000e+20" -> "1.5e+20", "1.0000000000e+20" -> "1e+20"
_MANTISSA_ZEROS_RE = re.compile(r"\.?0+e")
# "e+05" -> "e+5"
_EXPONENT_PADDING_RE = re.compile(r"e([+-])0+(\d)")
_PARTIAL_NUMBER_RE = re.compile(r"^-?\d*\.?\d*$")


def _to_float(value: Union[float, int, str, None]) -> Optional[float]:
    """Coerce display input to a float, None if it cannot be read."""
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _trim_fraction(text: str) -> str:
    """Strip trailing fractional zeros and a dangling point."""
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def _format_scientific(num: float) -> str:
    formatted = f"{num:.{DECIMAL_PLACES}e}"
    formatted = _MANTISSA_ZEROS_RE.sub("e", formatted, count=1)
    return _EXPONENT_PADDING_RE.sub(r"e\1\2", formatted)


def plain_decimal(num: float) -> str:
    """Shortest round-tripping decimal string, never in exponent form."""
    return _trim_fraction(format(Decimal(repr(num)), "f"))


def _format_normal(num: float) -> str:
    text = plain_decimal(num)
    if len(text) <= MAX_DIGITS:
        return text

    fixed = _trim_fraction(f"{num:.{DECIMAL_PLACES}f}")
    if len(fixed) > MAX_DIGITS:
        return _format_scientific(num)
    # -1.5e-12 rounds away to "-0"
    return "0" if fixed == "-0" else fixed


def format_number(value: Union[float, int, str, None]) -> str:
    """Format a value for the main display.

    None shows as "0". Strings are parsed first, so an operand under entry
    can be passed straight through.
    """
    if value is None:
        return "0"

    num = _to_float(value)
    if num is None or not math.isfinite(num):
        return ERROR_TEXT

    if num == 0:
        return "0"

    magnitude = abs(num)
    if magnitude >= MAX_SCIENTIFIC or magnitude < MIN_SCIENTIFIC:
        return _format_scientific(num)

    return _format_normal(num)


def format_for_screen_reader(value: Union[float, int, str, None]) -> str:
    """Format a value for spoken output, expanding e-notation into words."""
    formatted = format_number(value)
    if formatted == ERROR_TEXT or "e" not in formatted:
        return formatted

    coefficient, exponent = formatted.split("e")
    return f"{coefficient} times 10 to the power of {int(exponent)}"


def format_expression(tokens: list[Token]) -> str:
    """Render a token list for the expression line, space-joined."""
    return " ".join(
        t.symbol if isinstance(t, Operator) else format_number(t) for t in tokens
    )


def is_valid_number(text: str) -> bool:
    """Whether text is a (possibly incomplete) decimal numeral, e.g. "12." or "-0.5"."""
    if not text:
        return False
    return bool(_PARTIAL_NUMBER_RE.match(text))
