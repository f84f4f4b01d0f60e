"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest

from flatbind.config.logging import (
    PACKAGE_LOGGER,
    FlatbindLogHandler,
    configure_from_settings,
    configure_logging,
)
from flatbind.config.models import LoggingConfig
from flatbind.config.settings import FlatbindSettings


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Generator[None]:
    """Put the ``flatbind`` logger back the way the test found it."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = package_logger.handlers[:]
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


def _installed() -> list[logging.Handler]:
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers if isinstance(h, FlatbindLogHandler)]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_stops_propagation(self) -> None:
        configure_logging()
        assert logging.getLogger(PACKAGE_LOGGER).propagate is False

    def test_schema_build_debug_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("flatbind.schema.record").debug("Built schema")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Built schema"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "flatbind.schema.record"
        assert "timestamp" in parsed

    def test_repeated_calls_replace_own_handler(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(_installed()) == 1

    def test_host_handler_on_package_logger_kept(self) -> None:
        host_handler = logging.NullHandler()
        logging.getLogger(PACKAGE_LOGGER).addHandler(host_handler)
        configure_logging()
        configure_logging()
        assert host_handler in logging.getLogger(PACKAGE_LOGGER).handlers

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        host_handler = logging.NullHandler()
        root.addHandler(host_handler)
        try:
            before = (root.handlers[:], root.level)
            configure_logging(verbose=True, log_json=True)
            assert (root.handlers, root.level) == before
            assert host_handler in root.handlers
        finally:
            root.removeHandler(host_handler)

    def test_configure_from_settings(self) -> None:
        settings = FlatbindSettings(logging=LoggingConfig(verbose=True))
        configure_from_settings(settings)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
