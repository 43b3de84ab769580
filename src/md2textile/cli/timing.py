"""Timing utilities for the md2textile CLI.

The inspection command reports how long parsing and generation take; the
timers below measure an operation and log its duration at DEBUG.
"""

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TimingContext:
    """Context manager for timing operations with automatic logging.

    Parameters
    ----------
    operation_name : str
        Name of the operation being timed
    logger_instance : logging.Logger, optional
        Logger to use for output. If None, uses module logger
    log_level : int, default logging.DEBUG
        Log level for timing messages

    Examples
    --------
    >>> with TimingContext("Markdown parsing") as timer:
    ...     doc = parse(source)
    >>> timer.elapsed_ms
    0.42

    """

    def __init__(
        self, operation_name: str, logger_instance: Optional[logging.Logger] = None, log_level: int = logging.DEBUG
    ) -> None:
        """Initialize the timing context for an operation."""
        self.operation_name = operation_name
        self.logger = logger_instance or logger
        self.log_level = log_level
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __enter__(self) -> "TimingContext":
        """Enter the timing context and start the timer."""
        self.start_time = time.perf_counter()
        self.logger.log(self.log_level, f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit the timing context and log the elapsed time."""
        self.end_time = time.perf_counter()
        if exc_type is None:
            self.logger.log(self.log_level, f"{self.operation_name} completed in {format_duration(self.elapsed)}")
        else:
            self.logger.log(self.log_level, f"{self.operation_name} failed after {format_duration(self.elapsed)}")

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds (up to now while still running)."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed * 1000


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Examples
    --------
    >>> format_duration(0.0004)
    '400µs'
    >>> format_duration(0.123)
    '123ms'
    >>> format_duration(65.5)
    '1m 5.5s'

    """
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}µs"
    elif seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    return f"{minutes}m {secs:.1f}s"
