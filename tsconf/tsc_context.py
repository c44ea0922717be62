"""
Loader context for cross-cutting options.

This module defines the LoaderContext dataclass which holds the options that
affect how configuration resolution reports its progress (log level, output
stream, formatting).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for tsconf."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Detailed diagnostic information (-vvv)


@dataclass
class LoaderContext:
    """
    Holds cross-cutting options shared by every stage of configuration resolution.

    Attributes:
        log_rich_format:        If True, emit logs in rich format: may include log level, timestamps, etc.
        log_level:              Current logging level.
        silent:                 If True, nothing is logged regardless of log_level.
        log_info_to_stdout:     If True, info messages go to stdout instead of stderr.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    silent: bool = False
    log_info_to_stdout: bool = False

    @staticmethod
    def default() -> 'LoaderContext':
        """Create a LoaderContext with default settings."""
        return LoaderContext(log_level=LogLevel.WARNING)
