# test_settings.py

import os

import pytest
from pydantic import ValidationError

from uncalc.settings import DEFAULT_HISTORY_FILE, Settings, load_settings


def test_defaults_with_empty_environment():
    settings = load_settings({})
    assert settings.history_file == DEFAULT_HISTORY_FILE
    assert settings.log_level == "WARNING"
    assert settings.prompt == "> "
    assert settings.show_postfix is False
    assert settings.history_lines == 50


def test_environment_values():
    settings = load_settings({
        "UNCALC_HISTORY_FILE": "~/calc_hist",
        "UNCALC_LOG_LEVEL": "debug",
        "UNCALC_PROMPT": "calc> ",
        "UNCALC_SHOW_POSTFIX": "yes",
        "UNCALC_HISTORY_LINES": "20",
    })
    assert settings.history_file == os.path.expanduser("~/calc_hist")
    assert settings.log_level == "DEBUG"
    assert settings.prompt == "calc> "
    assert settings.show_postfix is True
    assert settings.history_lines == 20


def test_overrides_win_and_none_is_ignored():
    settings = load_settings({"UNCALC_LOG_LEVEL": "INFO"}, log_level="ERROR", history_file=None)
    assert settings.log_level == "ERROR"
    assert settings.history_file == DEFAULT_HISTORY_FILE


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")
    with pytest.raises(ValidationError):
        Settings(history_file="   ")
    with pytest.raises(ValidationError):
        load_settings({"UNCALC_HISTORY_LINES": "0"})


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("UNCALC_PROMPT=dotenv> \n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # Registers the variable with monkeypatch so whatever load_dotenv sets is undone.
    monkeypatch.setenv("UNCALC_PROMPT", "unset")
    monkeypatch.delenv("UNCALC_PROMPT")
    settings = load_settings()
    assert settings.prompt == "dotenv>"
