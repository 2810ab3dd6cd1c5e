"""JSON file persistence for history, memory and calculator state.

Each key is stored as <data_dir>/<key>.json. A failed read or write is logged
and served from an in-process copy instead, so a read-only or corrupt data
directory never turns into a calculator error.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from calcpad.config import MAX_HISTORY_ENTRIES

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"
MEMORY_KEY = "memory"
STATE_KEY = "state"


class JsonStorage:
    """Key/value store backed by one JSON file per key."""

    def __init__(self, root: Path, max_history: int = MAX_HISTORY_ENTRIES) -> None:
        self.root = root
        self.max_history = max_history
        self._fallback: dict[str, Any] = {}

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def set_item(self, key: str, value: Any) -> bool:
        """Write value as JSON. Returns False if only the fallback copy was updated."""
        self._fallback[key] = value
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(value, indent=2), encoding="utf-8")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save %s to %s: %s", key, self.root, e)
            return False

    def get_item(self, key: str) -> Optional[Any]:
        """Read a stored value, None if missing or unreadable."""
        p = self._path(key)
        if not p.exists():
            return self._fallback.get(key)
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", p, e)
            return self._fallback.get(key)

    def remove_item(self, key: str) -> None:
        self._fallback.pop(key, None)
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self._path(key), e)

    # --- typed accessors ---

    def save_history(self, history: list[dict]) -> bool:
        """Save history entries, oldest first, keeping the newest max_history."""
        return self.set_item(HISTORY_KEY, history[-self.max_history:])

    def load_history(self) -> list[dict]:
        history = self.get_item(HISTORY_KEY)
        return history if isinstance(history, list) else []

    def save_memory(self, value: float) -> bool:
        return self.set_item(MEMORY_KEY, {"memoryValue": value})

    def load_memory(self) -> dict:
        """Memory payload as saved; {"memoryValue": 0.0} if absent or malformed."""
        data = self.get_item(MEMORY_KEY)
        raw = data.get("memoryValue") if isinstance(data, dict) else None
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return {"memoryValue": 0.0}
        return {"memoryValue": float(raw)}

    def save_state(self, state: dict) -> bool:
        return self.set_item(STATE_KEY, state)

    def load_state(self) -> Optional[dict]:
        state = self.get_item(STATE_KEY)
        return state if isinstance(state, dict) else None
