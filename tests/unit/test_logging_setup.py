"""Tests for logging helpers."""

import io
import logging
import sys

import pytest

from lottolotto.adapters.logging import (
    KeyValueFormatter,
    extra_fields,
    get_logger,
    setup_logging,
)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="lottolotto.test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="Session started",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def clean_package_logger():
    """Restore the package logger after setup_logging() changes it."""
    logger = logging.getLogger("lottolotto")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.mark.adapters
class TestExtraFields:
    def test_standard_attributes_are_excluded(self) -> None:
        assert extra_fields(_record()) == {}

    def test_scalar_extras_are_included(self) -> None:
        fields = extra_fields(_record(endpoint="pool:1", iteration=3, held=True))
        assert fields == {"endpoint": "pool:1", "iteration": 3, "held": True}

    def test_non_scalar_extras_are_skipped(self) -> None:
        assert extra_fields(_record(payload={"a": 1}, missing=None)) == {}


@pytest.mark.adapters
class TestKeyValueFormatter:
    def test_plain_message_is_unchanged(self) -> None:
        formatter = KeyValueFormatter("%(message)s")
        assert formatter.format(_record()) == "Session started"

    def test_extras_are_appended(self) -> None:
        formatter = KeyValueFormatter("%(message)s")
        line = formatter.format(_record(endpoint="pool.example.com:3333"))
        assert line == "Session started endpoint=pool.example.com:3333"

    def test_exception_type_is_added(self) -> None:
        formatter = KeyValueFormatter("%(message)s")
        try:
            raise OSError("disk full")
        except OSError:
            record = logging.LogRecord(
                "lottolotto.test", logging.ERROR, "", 0, "write failed", (), None
            )
            record.exc_info = sys.exc_info()
        output = formatter.format(record)
        first_line = output.splitlines()[0]
        assert first_line == "write failed exc_type=OSError"
        assert "OSError: disk full" in output


@pytest.mark.adapters
class TestGetLogger:
    def test_prefixes_foreign_names(self) -> None:
        assert get_logger("examples.run").name == "lottolotto.examples.run"

    def test_keeps_package_names(self) -> None:
        assert get_logger("lottolotto.service").name == "lottolotto.service"
        assert get_logger("lottolotto").name == "lottolotto"


@pytest.mark.adapters
class TestSetupLogging:
    def test_writes_key_value_lines(self, clean_package_logger: logging.Logger) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream)
        get_logger("lottolotto.test").info("hello", extra={"iteration": 5})
        assert stream.getvalue().rstrip().endswith("hello iteration=5")

    def test_repeated_setup_does_not_duplicate_output(
        self, clean_package_logger: logging.Logger
    ) -> None:
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)
        setup_logging("INFO", stream=stream)
        get_logger("lottolotto.test").info("once")
        assert stream.getvalue().count("once") == 1

    def test_level_from_environment(
        self, clean_package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOTTOLOTTO_LOG_LEVEL", "warning")
        logger = setup_logging(stream=io.StringIO())
        assert logger.level == logging.WARNING
