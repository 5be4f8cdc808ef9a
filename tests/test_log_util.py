"""Tests for helpers.log_util."""
import logging

from helpers.log_util import LOG_LEVEL_ENV, configure_logging, resolve_level


def test_resolve_level_from_env(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_level() == logging.DEBUG


def test_resolve_level_invalid_falls_back_to_info(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert resolve_level() == logging.INFO
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(logging.WARNING) == logging.WARNING


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    configure_logging("WARNING")
    configure_logging("ERROR")
    named = [h for h in root.handlers if h.get_name() == "ngram_drill"]
    assert len(named) == 1
    assert root.level == logging.ERROR
