"""Synchronous listener registries and the payloads the calculator emits.

Each Signal holds its own listeners; subscribing returns a handle that detaches
the listener when called. Listeners run inline, in subscription order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, TypeVar

from calcpad.errors import CalculatorError
from calcpad.models import Phase, Token

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class Signal(Generic[T]):
    """A list of callbacks that all receive the same payload."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def emit(self, payload: T) -> None:
        # Copy so a listener may detach itself mid-emit
        for callback in list(self._listeners):
            callback(payload)


@dataclass
class StateChange:
    """What a display needs to redraw after any mutation."""

    display_value: str
    expression_display: str
    has_memory: bool
    phase: Phase


@dataclass
class Calculation:
    """A successful evaluation and the tokens that produced it."""

    result: float
    expression: list[Token] = field(default_factory=list)


@dataclass
class ErrorRaised:
    message: str
    error: Optional[CalculatorError] = None
