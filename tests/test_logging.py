"""Tests for logging configuration."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from openai_wire.log_config import PACKAGE_LOGGER, configure_logging, configure_logging_from_settings


@pytest.fixture(autouse=True)
def reset_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def test_configure_logging_console_only(reset_package_logger):
    """Test that configure_logging works in console-only mode."""
    package_logger = configure_logging(log_level="DEBUG", log_file="")

    assert package_logger is reset_package_logger
    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0], logging.StreamHandler)
    assert not isinstance(package_logger.handlers[0], RotatingFileHandler)
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False


def test_configure_logging_with_file(tmp_path):
    """Test that configure_logging adds RotatingFileHandler when log_file is set."""
    log_file = tmp_path / "test.log"
    package_logger = configure_logging(
        log_level="INFO",
        log_file=str(log_file),
        log_file_max_bytes=5_000_000,
        log_file_backup_count=3,
    )

    assert len(package_logger.handlers) == 2
    assert isinstance(package_logger.handlers[1], RotatingFileHandler)
    file_handler = package_logger.handlers[1]
    assert file_handler.maxBytes == 5_000_000
    assert file_handler.backupCount == 3
    assert package_logger.level == logging.INFO
    assert log_file.exists()


def test_configure_logging_creates_directory(tmp_path):
    """Test that configure_logging creates parent directories if they don't exist."""
    log_file = tmp_path / "logs" / "nested" / "test.log"
    assert not log_file.parent.exists()

    configure_logging(log_level="WARNING", log_file=str(log_file))

    assert log_file.parent.exists()
    assert log_file.exists()


def test_root_logger_handlers_survive():
    """The host application's root handlers and level are left untouched."""
    app_handler = logging.NullHandler()
    root_level = logging.root.level
    logging.root.addHandler(app_handler)
    try:
        configure_logging(log_level="DEBUG")

        assert app_handler in logging.root.handlers
        assert logging.root.level == root_level
    finally:
        logging.root.removeHandler(app_handler)


def test_reconfigure_replaces_only_own_handlers(tmp_path):
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    app_handler = logging.NullHandler()
    package_logger.addHandler(app_handler)

    configure_logging(log_level="INFO", log_file=str(tmp_path / "first.log"))
    configure_logging(log_level="INFO")

    assert app_handler in package_logger.handlers
    assert len(package_logger.handlers) == 2
    assert not any(isinstance(h, RotatingFileHandler) for h in package_logger.handlers)


def test_propagate_to_application_handlers():
    package_logger = configure_logging(log_level="INFO", propagate=True)
    assert package_logger.propagate is True


def test_decoder_events_written_to_file(tmp_path):
    """Stream decode failures are logged as JSON lines."""
    from openai_wire.models import ChatStreamResult
    from openai_wire.streaming import SSEDecoder

    log_file = tmp_path / "client.log"
    package_logger = configure_logging(log_level="INFO", log_file=str(log_file))

    decoder = SSEDecoder(ChatStreamResult)
    decoder.feed('data: {"id": "x"}\n')
    assert decoder.drain()[0].kind == "error"

    for handler in package_logger.handlers:
        handler.flush()

    log_content = log_file.read_text(encoding="utf-8")
    assert "sse_frame_decode_failed" in log_content


def test_configure_logging_from_settings(settings):
    package_logger = configure_logging_from_settings(settings)
    assert package_logger.level == logging.DEBUG
