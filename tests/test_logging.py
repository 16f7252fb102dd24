"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from debtsage.config import BaseConfig
from debtsage.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path))
    return BaseConfig()


def test_json_formatter():
    """JSONFormatter emits the core fields plus any extras."""
    formatter = JSONFormatter()

    record = logging.LogRecord(
        name="debtsage.services.payoff",
        level=logging.INFO,
        pathname="payoff.py",
        lineno=42,
        msg="Payoff simulated",
        args=(),
        exc_info=None,
    )
    record.module = "payoff"
    record.funcName = "calculate_payoff_strategy"
    record.months = 31

    log_data = json.loads(formatter.format(record))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "debtsage.services.payoff"
    assert log_data["message"] == "Payoff simulated"
    assert log_data["function"] == "calculate_payoff_strategy"
    assert log_data["line"] == 42
    assert log_data["extra"] == {"months": 31}
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    formatter = JSONFormatter()

    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    record = logging.LogRecord(
        name="test.logger",
        level=logging.ERROR,
        pathname="test.py",
        lineno=42,
        msg="Error occurred",
        args=(),
        exc_info=exc_info,
    )

    log_data = json.loads(formatter.format(record))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_setup_logging(config, tmp_path):
    """Logging setup writes JSON lines to a rotating file under DATA_DIR."""
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "debtsage"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "debtsage.log"
    assert log_file.exists()

    get_logger("services.payoff").warning("Term cap reached", extra={"months": 600})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "debtsage.services.payoff"
    assert entries[-1]["extra"]["months"] == 600


def test_get_logger():
    """get_logger namespaces loggers under the package root exactly once."""
    assert get_logger("module1").name == "debtsage.module1"
    assert get_logger("debtsage.services.refinance").name == "debtsage.services.refinance"
    assert get_logger("debtsage").name == "debtsage"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
