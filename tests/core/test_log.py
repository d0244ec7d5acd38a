"""Unit tests for core logging functionality."""

import logging

from core import get_logger, setup_logging, setup_test_logging


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO


def test_setup_logging_custom_level() -> None:
    """Test setup_logging with custom level."""
    setup_logging(level=logging.DEBUG)
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG


def test_setup_logging_level_name() -> None:
    setup_logging(level="warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_quiets_http_clients() -> None:
    setup_logging(level=logging.DEBUG)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_file_logging(tmp_path) -> None:
    setup_logging(enable_file_logging=True, log_dir=tmp_path)
    get_logger("file_test").info("written to file")

    log_file = tmp_path / "arni.log"
    assert log_file.exists()
    assert "written to file" in log_file.read_text()


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"


def teardown_module() -> None:
    setup_test_logging()
