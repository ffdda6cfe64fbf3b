"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from cmdlint.config.logging import NOISY_LOGGERS, PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_noisy_loggers_quieted(self) -> None:
        configure_logging(verbose=True)
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("cmdlint.test")
        log.warning("command.unresolved", command="Get-Widget")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "command.unresolved"
        assert parsed["command"] == "Get-Widget"
        assert parsed["level"] == "warning"

    def test_stdlib_records_share_handler(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("cmdlint.rules").warning("plain %s", "record")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "plain record"
