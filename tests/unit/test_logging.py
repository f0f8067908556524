"""Unit tests for logging setup."""

import io
import json
import logging

import pytest

from doctidy.utils.logging import (
    ROOT_LOGGER,
    DocTidyLogger,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    VerboseFormatter,
    configure_from_cli,
    get_logger,
    setup_logging,
)


@pytest.fixture
def stream():
    """Capture doctidy log output and restore defaults afterwards."""
    buffer = io.StringIO()
    yield buffer
    setup_logging()


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("doctidy.test", level, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the three output formats."""

    def test_human(self) -> None:
        """Test the plain human format."""
        assert HumanFormatter().format(_record("hello")) == "[INFO] hello"

    def test_human_colors(self) -> None:
        """Test that levels are colored for terminals."""
        line = HumanFormatter(use_colors=True).format(_record("bad", logging.ERROR))

        assert line.startswith("\033[31m[ERROR]")

    def test_verbose_has_timestamp(self) -> None:
        """Test that verbose output includes a timestamp."""
        line = VerboseFormatter().format(_record("hello"))

        assert line.startswith("[INFO][")
        assert line.endswith("] hello")

    def test_json(self) -> None:
        """Test that JSON output merges structured fields."""
        entry = json.loads(JSONFormatter().format(_record("hello", extra_data={"path": "A.java"})))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "doctidy.test"
        assert entry["msg"] == "hello"
        assert entry["path"] == "A.java"
        assert "ts" in entry


class TestSetupLogging:
    """Tests for logger configuration."""

    def test_get_logger_is_structured(self) -> None:
        """Test that loggers support structured()."""
        assert isinstance(get_logger(), DocTidyLogger)

    def test_human_mode(self, stream: io.StringIO) -> None:
        """Test logging in human mode."""
        setup_logging(LogMode.HUMAN, stream=stream)

        get_logger().info("Fixed: A.java")

        assert stream.getvalue() == "[INFO] Fixed: A.java\n"

    def test_module_loggers_propagate_to_root(self, stream: io.StringIO) -> None:
        """Test that module loggers reach the package handler."""
        setup_logging(LogMode.HUMAN, level=logging.DEBUG, stream=stream)

        logging.getLogger(f"{ROOT_LOGGER}.pipeline").debug("Unchanged: %s", "A.java")

        assert "[DEBUG] Unchanged: A.java" in stream.getvalue()

    def test_level_filters(self, stream: io.StringIO) -> None:
        """Test that records below the level are dropped."""
        setup_logging(LogMode.HUMAN, level=logging.WARNING, stream=stream)

        get_logger().info("hidden")
        get_logger().warning("shown")

        assert stream.getvalue() == "[WARNING] shown\n"

    def test_structured_json(self, stream: io.StringIO) -> None:
        """Test structured fields in JSON output."""
        setup_logging(LogMode.JSON, stream=stream)

        get_logger().structured(logging.ERROR, "Failed to fix: A.java", path="A.java", kind="parse")

        entry = json.loads(stream.getvalue())
        assert entry["msg"] == "Failed to fix: A.java"
        assert entry["kind"] == "parse"

    def test_structured_respects_level(self, stream: io.StringIO) -> None:
        """Test that structured() honors the level."""
        setup_logging(LogMode.JSON, level=logging.WARNING, stream=stream)

        get_logger().structured(logging.INFO, "quiet", path="A.java")

        assert stream.getvalue() == ""

    def test_does_not_propagate(self) -> None:
        """Test that the package logger does not propagate."""
        setup_logging()

        assert logging.getLogger(ROOT_LOGGER).propagate is False


class TestConfigureFromCli:
    """Tests for flag-driven configuration."""

    @pytest.mark.parametrize(
        ("flags", "level", "formatter"),
        [
            ({}, logging.INFO, HumanFormatter),
            ({"verbose": True}, logging.DEBUG, VerboseFormatter),
            ({"quiet": True}, logging.WARNING, HumanFormatter),
            ({"ci": True}, logging.INFO, JSONFormatter),
        ],
    )
    def test_flags(self, flags: dict, level: int, formatter: type) -> None:
        """Test mapping CLI flags to level and formatter."""
        configure_from_cli(**flags)
        logger = logging.getLogger(ROOT_LOGGER)

        try:
            assert logger.level == level
            assert type(logger.handlers[0].formatter) is formatter
        finally:
            setup_logging()
