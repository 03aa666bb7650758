"""Tests for TerminalConfig defaults and environment overrides."""

from __future__ import annotations

import pytest

from terminality.config import DEFAULT_POLL_INTERVAL, TerminalConfig

_ENV_VARS = (
    "TERMINALITY_ENCODING",
    "TERMINALITY_POLL_INTERVAL",
    "TERMINALITY_ASYNC_IO",
    "TERMINALITY_HANDLE_RESIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = TerminalConfig()
    assert config.handle_resize_signal is True
    assert config.handle_termination_signals is True
    assert config.async_io is False
    assert config.encoding == "utf-8"
    assert config.poll_interval == DEFAULT_POLL_INTERVAL
    assert config.color_command == ("tput", "colors")


def test_load_without_env_matches_defaults():
    assert TerminalConfig.load() == TerminalConfig()


def test_unknown_encoding_rejected():
    with pytest.raises(LookupError):
        TerminalConfig(encoding="no-such-codec")


def test_non_positive_interval_rejected():
    with pytest.raises(ValueError, match="positive"):
        TerminalConfig(poll_interval=0)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TERMINALITY_ENCODING", "latin-1")
    monkeypatch.setenv("TERMINALITY_POLL_INTERVAL", "0.02")
    monkeypatch.setenv("TERMINALITY_ASYNC_IO", "yes")
    monkeypatch.setenv("TERMINALITY_HANDLE_RESIZE", "off")

    config = TerminalConfig.load()

    assert config.encoding == "latin-1"
    assert config.poll_interval == 0.02
    assert config.async_io is True
    assert config.handle_resize_signal is False


def test_env_bad_interval(monkeypatch):
    monkeypatch.setenv("TERMINALITY_POLL_INTERVAL", "fast")
    with pytest.raises(ValueError, match="TERMINALITY_POLL_INTERVAL"):
        TerminalConfig.load()


def test_env_negative_interval(monkeypatch):
    monkeypatch.setenv("TERMINALITY_POLL_INTERVAL", "-1")
    with pytest.raises(ValueError, match="positive"):
        TerminalConfig.load()


def test_env_bad_boolean(monkeypatch):
    monkeypatch.setenv("TERMINALITY_ASYNC_IO", "maybe")
    with pytest.raises(ValueError, match="TERMINALITY_ASYNC_IO must be a boolean"):
        TerminalConfig.load()


def test_env_bad_encoding(monkeypatch):
    monkeypatch.setenv("TERMINALITY_ENCODING", "no-such-codec")
    with pytest.raises(ValueError, match="unknown codec"):
        TerminalConfig.load()
