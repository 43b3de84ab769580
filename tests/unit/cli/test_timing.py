"""Unit tests for timing instrumentation utilities."""

import logging

import pytest

from md2textile.cli.timing import TimingContext, format_duration


@pytest.mark.unit
class TestTimingContext:
    """Test TimingContext context manager."""

    def test_elapsed_is_measured(self):
        """Elapsed time is non-negative and frozen after exit."""
        with TimingContext("test operation") as ctx:
            sum(range(1000))
        elapsed = ctx.elapsed
        assert elapsed >= 0
        assert ctx.elapsed == elapsed
        assert ctx.elapsed_ms == pytest.approx(elapsed * 1000)

    def test_not_started(self):
        """A timer that never ran reports zero."""
        assert TimingContext("idle").elapsed == 0.0

    def test_logs_start_and_completion(self, caplog):
        """Start and completion are logged at DEBUG."""
        with caplog.at_level(logging.DEBUG):
            with TimingContext("test operation"):
                pass

        assert any("Starting: test operation" in record.message for record in caplog.records)
        assert any("completed in" in record.message for record in caplog.records)

    def test_logs_failure(self, caplog):
        """A failing block logs the failure and re-raises."""
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                with TimingContext("failing operation"):
                    raise ValueError("Test error")

        assert any("failed after" in record.message for record in caplog.records)

    def test_custom_logger(self, caplog):
        """A custom logger receives the records."""
        custom_logger = logging.getLogger("custom_test")
        with caplog.at_level(logging.DEBUG, logger="custom_test"):
            with TimingContext("test", logger_instance=custom_logger):
                pass

        assert any(record.name == "custom_test" for record in caplog.records)


@pytest.mark.unit
class TestFormatDuration:
    """Test duration formatting."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0.0004, "400µs"),
            (0.123, "123ms"),
            (5.25, "5.2s"),
            (65.5, "1m 5.5s"),
        ],
    )
    def test_format(self, seconds, expected):
        """Durations pick a readable unit."""
        assert format_duration(seconds) == expected
