"""Tests for environment-driven settings."""

from pathlib import Path

from calcpad.config import MAX_HISTORY_ENTRIES, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.data_dir == Path.home() / ".calcpad"
    assert settings.history_limit == MAX_HISTORY_ENTRIES
    assert settings.log_level == "WARNING"


def test_overrides(tmp_path):
    settings = load_settings({
        "CALCPAD_HOME": str(tmp_path),
        "CALCPAD_HISTORY_LIMIT": "25",
        "CALCPAD_LOG_LEVEL": "debug",
    })
    assert settings.data_dir == tmp_path
    assert settings.history_limit == 25
    assert settings.log_level == "DEBUG"


def test_bad_values_fall_back():
    settings = load_settings({"CALCPAD_HISTORY_LIMIT": "-3", "CALCPAD_LOG_LEVEL": "loud"})
    assert settings.history_limit == MAX_HISTORY_ENTRIES
    assert settings.log_level == "WARNING"
    assert load_settings({"CALCPAD_HISTORY_LIMIT": "many"}).history_limit == MAX_HISTORY_ENTRIES


def test_reads_os_environ(monkeypatch, tmp_path):
    monkeypatch.setenv("CALCPAD_HOME", str(tmp_path))
    assert load_settings().data_dir == tmp_path
