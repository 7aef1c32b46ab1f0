# tests/test_logging_setup.py

import logging

from core.logging_setup import resolve_level


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("KILLICK_LOG_LEVEL", "ERROR")
    assert resolve_level(logging.DEBUG) == logging.DEBUG
    assert resolve_level("warning") == logging.WARNING


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("KILLICK_LOG_LEVEL", "debug")
    assert resolve_level() == logging.DEBUG


def test_default_and_unknown_levels(monkeypatch):
    monkeypatch.delenv("KILLICK_LOG_LEVEL", raising=False)
    assert resolve_level() == logging.INFO
    assert resolve_level("chatty") == logging.INFO
