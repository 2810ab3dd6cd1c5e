"""Display limits and runtime settings for calcpad.

The numeric limits are shared: the formatter switches to scientific notation
at the same magnitudes the evaluator treats as overflow/underflow.

Runtime settings are read from the environment, so a shell profile (or a test
via monkeypatch) can relocate the data directory without touching the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Display limits
MAX_DIGITS = 15
MIN_SCIENTIFIC = 1e-15
MAX_SCIENTIFIC = 1e15
DECIMAL_PLACES = 10

MAX_HISTORY_ENTRIES = 100

_ENV_HOME = "CALCPAD_HOME"
_ENV_HISTORY_LIMIT = "CALCPAD_HISTORY_LIMIT"
_ENV_LOG_LEVEL = "CALCPAD_LOG_LEVEL"


@dataclass
class Settings:
    """Resolved runtime settings."""

    data_dir: Path
    history_limit: int = MAX_HISTORY_ENTRIES
    log_level: str = "WARNING"


def _default_data_dir() -> Path:
    return Path.home() / ".calcpad"


def _parse_history_limit(raw: Optional[str]) -> int:
    """Positive integer from the environment, or the default."""
    if not raw:
        return MAX_HISTORY_ENTRIES
    try:
        value = int(raw)
    except ValueError:
        return MAX_HISTORY_ENTRIES
    return value if value > 0 else MAX_HISTORY_ENTRIES


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or "WARNING").strip().upper()
    # getLevelName returns "Level X" for unknown names
    if isinstance(logging.getLevelName(level), int):
        return level
    return "WARNING"


def load_settings(env: Optional[dict[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.
    """
    env = os.environ if env is None else env
    home = env.get(_ENV_HOME)
    return Settings(
        data_dir=Path(home).expanduser() if home else _default_data_dir(),
        history_limit=_parse_history_limit(env.get(_ENV_HISTORY_LIMIT)),
        log_level=_parse_log_level(env.get(_ENV_LOG_LEVEL)),
    )
