"""Calculation history with persistence.

Entries are kept oldest first internally and returned newest first. The list
is trimmed to max_entries on every addition and saved after every change.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from calcpad.config import MAX_HISTORY_ENTRIES
from calcpad.errors import CalculatorError
from calcpad.events import Signal, Unsubscribe
from calcpad.formatter import format_expression, format_number
from calcpad.models import HistoryEntry, Token
from calcpad.storage import JsonStorage

logger = logging.getLogger(__name__)


def _parse_entries(raw: list) -> list[HistoryEntry]:
    """Convert stored dicts, skipping any that are not history entries."""
    entries: list[HistoryEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            entries.append(HistoryEntry.from_dict(item))
        except (KeyError, TypeError, ValueError, CalculatorError) as e:
            logger.debug("Skipping malformed history entry %r: %s", item, e)
    return entries


class HistoryManager:
    """Records successful calculations."""

    def __init__(
        self,
        storage: Optional[JsonStorage] = None,
        max_entries: int = MAX_HISTORY_ENTRIES,
    ) -> None:
        self.storage = storage
        self.max_entries = max_entries
        self._entries: list[HistoryEntry] = []
        self._changed: Signal[list[HistoryEntry]] = Signal()
        if storage is not None:
            self._entries = _parse_entries(storage.load_history())[-max_entries:]

    def _next_id(self) -> int:
        # Millisecond clock ids, bumped past the newest entry to stay unique
        candidate = int(time.time() * 1000)
        if self._entries:
            candidate = max(candidate, max(e.id for e in self._entries) + 1)
        return candidate

    def add_entry(self, expression: list[Token], result: float) -> HistoryEntry:
        entry = HistoryEntry(
            id=self._next_id(),
            timestamp=datetime.now(timezone.utc).isoformat(),
            expression=list(expression),
            expression_string=format_expression(expression),
            result=result,
            result_string=format_number(result),
        )
        self._entries.append(entry)
        if len(self._entries) > self.max_entries:
            dropped = len(self._entries) - self.max_entries
            self._entries = self._entries[dropped:]
            logger.debug("History trimmed by %d entries", dropped)
        self._save()
        self._notify()
        return entry

    def entries(self) -> list[HistoryEntry]:
        """All entries, newest first."""
        return list(reversed(self._entries))

    def get_entry(self, entry_id: int) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove_entry(self, entry_id: int) -> None:
        self._entries = [e for e in self._entries if e.id != entry_id]
        self._save()
        self._notify()

    def clear(self) -> None:
        self._entries = []
        self._save()
        self._notify()

    def count(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def subscribe(self, callback: Callable[[list[HistoryEntry]], None]) -> Unsubscribe:
        return self._changed.subscribe(callback)

    def export_json(self) -> str:
        return json.dumps([e.to_dict() for e in self._entries], indent=2)

    def import_json(self, text: str) -> bool:
        """Replace history with a JSON list of entries. False if text is unusable."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Could not import history: %s", e)
            return False
        if not isinstance(raw, list):
            return False
        self._entries = _parse_entries(raw)[-self.max_entries:]
        self._save()
        self._notify()
        return True

    def _save(self) -> None:
        if self.storage is not None:
            self.storage.save_history([e.to_dict() for e in self._entries])

    def _notify(self) -> None:
        self._changed.emit(self.entries())
