"""Session wiring: a calculator plus its history, memory and storage.

Data flow:
1. Load memory and the last calculator state from storage
2. Record every successful calculation in history
3. Save memory whenever it changes
4. Save calculator state on close
"""

from __future__ import annotations

import logging
from typing import Optional

from calcpad.calculator import Calculator
from calcpad.config import Settings, load_settings
from calcpad.errors import CalculatorError
from calcpad.events import Calculation, Unsubscribe
from calcpad.history import HistoryManager
from calcpad.memory import MemoryRegister
from calcpad.models import CalculatorState
from calcpad.storage import JsonStorage

logger = logging.getLogger(__name__)


class Session:
    """Everything one calculator run needs, loaded from and saved to disk.

    With restore_state=False the calculator starts fresh and its state is
    not written back on close; history and memory are still shared.
    """

    def __init__(self, settings: Optional[Settings] = None, restore_state: bool = True) -> None:
        self.settings = settings or load_settings()
        self.restore_state = restore_state
        self.storage = JsonStorage(self.settings.data_dir, max_history=self.settings.history_limit)
        self.memory = MemoryRegister()
        self.memory.load_dict(self.storage.load_memory())
        self.calculator = Calculator(memory=self.memory)
        self.history = HistoryManager(self.storage, max_entries=self.settings.history_limit)

        if restore_state:
            self._restore_state()

        self._detach: list[Unsubscribe] = [
            self.calculator.on_calculation(self._record),
            self.memory.subscribe(self.storage.save_memory),
        ]
        logger.debug("Session opened at %s", self.settings.data_dir)

    def _restore_state(self) -> None:
        raw = self.storage.load_state()
        if raw is None:
            return
        try:
            self.calculator.restore(CalculatorState.from_dict(raw))
        except (KeyError, TypeError, ValueError, CalculatorError) as e:
            logger.warning("Ignoring saved calculator state: %s", e)

    def _record(self, event: Calculation) -> None:
        self.history.add_entry(event.expression, event.result)

    def close(self) -> None:
        """Detach listeners and save the calculator state."""
        for detach in self._detach:
            detach()
        self._detach = []
        if self.restore_state:
            self.storage.save_state(self.calculator.state.to_dict())
        logger.debug("Session closed")

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
