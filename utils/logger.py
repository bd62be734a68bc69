# utils/logger.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Logging utility for history checking with configurable levels

import logging
import sys
from enum import Enum
from typing import Any, Optional, TextIO


class LogLevel(Enum):
    """Log levels for history checking."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CheckerLogger:
    """Centralized logger for history checking with structured output."""

    def __init__(self, name: str = "orcheck", level: LogLevel = LogLevel.INFO):
        """Initialize the checker logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CheckerFormatter())

        self.logger.addHandler(console_handler)
        self.logger.propagate = False

    def set_stream(self, stream: TextIO) -> Optional[TextIO]:
        """Redirect console output; returns the previous stream."""
        previous = None
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                previous = handler.stream
                handler.setStream(stream)
        return previous

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for history checking events
    def checker_start(self, variant: str, op_count: int, config: Optional[str] = None):
        """Log checker initialization."""
        self.info("=== Starting Check ===")
        self.info(f"Variant: {variant}")
        self.info(f"Operations in history: {op_count}")
        if config:
            self.debug(f"Configuration: {config}")

    def partition_transition(self, time: Any, active: bool):
        """Log a nemesis start/stop transition."""
        state = "🔴 partition ON" if active else "🟢 partition OFF"
        self.debug(f"    {state} at t={time}")

    def delete_evaluated(self, value: Any, event_id: Any, recorded: Any, valid: bool):
        """Log the validity decision for a completed delete."""
        mark = "✅" if valid else "⚠️ "
        self.debug(
            f"    {mark} delete({value!r}) tag={event_id!r} recorded={recorded!r} valid={valid}"
        )

    def read_selected(self, process: Any, values: Any, time: Any):
        """Log a read chosen as a process's final read."""
        self.debug(f"      final read p{process} @ t={time}: {values}")

    def convergence_skipped(self, reason: str):
        """Log that convergence could not be assessed."""
        self.warning(f"⚠️  Convergence not assessed: {reason}")

    def final_verdict(self, valid: bool):
        """Log final checking verdict."""
        self.info(f"\n>>> FINAL VERDICT: {'VALID' if valid else 'INVALID'} <<<")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class CheckerFormatter(logging.Formatter):
    """Custom formatter for checker logging with clean output."""

    def format(self, record):
        # INFO and above print the bare message
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CheckerLogger] = None


def get_logger(name: str = "orcheck") -> CheckerLogger:
    """Get or create the global checker logger instance.

    Args:
        name: Logger name (default: "orcheck")

    Returns:
        CheckerLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = CheckerLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)
