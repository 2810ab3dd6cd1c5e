"""Memory register backing the M+, M-, MR and MC keys."""

from __future__ import annotations

from typing import Callable

from calcpad.events import Signal, Unsubscribe


class MemoryRegister:
    """A running total. Listeners receive the new value after every change."""

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)
        self._changed: Signal[float] = Signal()

    @property
    def value(self) -> float:
        return self._value

    def has_value(self) -> bool:
        return self._value != 0

    def add(self, value: float) -> None:
        self._set(self._value + value)

    def subtract(self, value: float) -> None:
        self._set(self._value - value)

    def recall(self) -> float:
        return self._value

    def clear(self) -> None:
        self._set(0.0)

    def set_value(self, value: float) -> None:
        self._set(value)

    def subscribe(self, callback: Callable[[float], None]) -> Unsubscribe:
        return self._changed.subscribe(callback)

    def _set(self, value: float) -> None:
        self._value = float(value)
        self._changed.emit(self._value)

    def to_dict(self) -> dict:
        return {"memoryValue": self._value}

    def load_dict(self, d: object) -> bool:
        """Restore from a to_dict() payload. Returns False if it was ignored."""
        if not isinstance(d, dict):
            return False
        raw = d.get("memoryValue")
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return False
        self._set(raw)
        return True
