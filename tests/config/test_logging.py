"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from reqbind.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger("reqbind")
    lib_level = lib.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.setLevel(lib_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("reqbind").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("reqbind").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("reqbind.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "reqbind.test"
        assert "timestamp" in parsed

    def test_binder_debug_records_are_structured(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("reqbind.binding.binder").debug("Decoded request body into field body")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Decoded request body into field body"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "reqbind.binding.binder"

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("reqbind.binding.binder").debug("noise")
        logging.getLogger("pydantic").debug("noise")
        assert capfd.readouterr().err == ""

    def test_json_traceback_is_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        try:
            raise ValueError("bad value")
        except ValueError:
            logging.getLogger("reqbind.services.inspect").debug("Coercion failed", exc_info=True)

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Coercion failed"
        assert parsed["exception"][0]["exc_type"] == "ValueError"

    def test_custom_stream(self, capfd: pytest.CaptureFixture[str]) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        logging.getLogger("reqbind").warning("to the stream")
        assert "to the stream" in stream.getvalue()
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
