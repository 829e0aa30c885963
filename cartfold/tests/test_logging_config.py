"""
Tests for structured logging setup.
"""

import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from cartfold.logging_config import TraceIDFilter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(level)


def test_setup_logging_json_from_env(monkeypatch):
    monkeypatch.setenv("CARTFOLD_LOG_LEVEL", "debug")
    monkeypatch.setenv("CARTFOLD_LOG_FORMAT", "json")

    setup_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_setup_logging_text_override(monkeypatch):
    monkeypatch.setenv("CARTFOLD_LOG_FORMAT", "json")

    setup_logging(level="WARNING", fmt="text")

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_unknown_level_defaults_to_info():
    setup_logging(level="chatty")

    assert logging.getLogger().level == logging.INFO


def test_get_logger_carries_trace_id():
    logger = get_logger("cartfold.test", trace_id="cart-1")

    assert logger.extra == {"trace_id": "cart-1"}
    assert get_logger("cartfold.test").extra == {"trace_id": "N/A"}


def test_trace_id_filter_fills_missing():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert TraceIDFilter().filter(record)
    assert record.trace_id == "N/A"
