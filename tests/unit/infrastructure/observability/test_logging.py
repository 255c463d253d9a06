"""Tests for structured logging."""

import json
import logging
import sys

from profilter.domain.exceptions import AggregationError, RequestError
from profilter.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self) -> None:
        """Test setting and getting correlation ID."""
        result = set_correlation_id("run-123")
        assert result == "run-123"
        assert get_correlation_id() == "run-123"

    def test_set_correlation_id_generates_uuid_when_none(self) -> None:
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_injects_correlation_id(self) -> None:
        """Every record gets the current id attached."""
        set_correlation_id("run-456")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "run-456"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self) -> None:
        """Test configuring logging with DEBUG level."""
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self) -> None:
        """Typos in the level don't crash startup."""
        configure_logging(log_level="LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_single_stderr_handler(self) -> None:
        """Reconfiguring replaces the handler; output never goes to stdout."""
        configure_logging(log_level="INFO")
        configure_logging(log_level="INFO")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    def test_json_format_selects_json_formatter(self) -> None:
        """JSON mode uses the JSON formatter."""
        configure_logging(log_level="INFO", json_format=True)
        assert isinstance(logging.getLogger().handlers[0].formatter, CustomJsonFormatter)

    def test_text_format_selects_compact_formatter(self) -> None:
        """Text mode uses the compact formatter."""
        configure_logging(log_level="INFO", json_format=False)
        assert isinstance(logging.getLogger().handlers[0].formatter, CompactExceptionFormatter)

    def test_http_libraries_quieted(self) -> None:
        """httpx request logs stay out of the output."""
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestFormatters:
    """Test formatter output."""

    def test_json_record_fields(self) -> None:
        """JSON lines carry level, logger and correlation id."""
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = logging.LogRecord("profilter", logging.INFO, __file__, 7, "Looking up bob...", None, None)
        record.correlation_id = "run-789"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Looking up bob..."
        assert payload["level"] == "INFO"
        assert payload["logger"] == "profilter"
        assert payload["correlation_id"] == "run-789"

    def test_compact_exception_chain_root_cause_first(self) -> None:
        """The chain is printed from root cause to the error the user sees."""
        try:
            try:
                raise RequestError("Spotify API returned 500", url="https://x")
            except RequestError as e:
                raise AggregationError("bob", e.message) from e
        except AggregationError:
            exc_info = sys.exc_info()

        text = CompactExceptionFormatter().formatException(exc_info)
        lines = [line for line in text.splitlines() if line.startswith("╰─►")]

        assert lines[0] == "╰─► RequestError: Spotify API returned 500"
        assert lines[1].startswith("╰─► AggregationError: Failed to aggregate playlists of bob")
        assert "The above exception" not in text

    def test_compact_formatter_without_exception(self) -> None:
        """An empty exc_info renders nothing."""
        assert CompactExceptionFormatter().formatException((None, None, None)) == ""
