# utils/__init__.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Utility module exports (history reading lives in utils.history_reader)

from .logger import (
    CheckerLogger,
    LogLevel,
    get_logger,
    set_log_level,
)

__all__ = [
    "CheckerLogger",
    "LogLevel",
    "get_logger",
    "set_log_level",
]
