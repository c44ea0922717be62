"""
Logging utilities for tsconf.

This module provides logging functions that respect the LoaderContext
flags (log level, silent mode and the info output stream).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time

from tsc_context import LoaderContext, LogLevel


def log(context: LoaderContext, log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context admits its level.

    Args:
        context:    The loader context containing logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        print("No context provided for logging.", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        return
    if context.silent:
        return
    prefix = ""
    if context.log_rich_format:
        # timestamp prefix
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        stream = sys.stderr
        if log_level == LogLevel.INFO and context.log_info_to_stdout:
            stream = sys.stdout
        print(f"{prefix}{message}", file=stream)

def log_error(context: LoaderContext, message: str) -> None:
    """
    Log an error-level message if logging level is ERROR or higher.

    Args:
        context: The loader context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.ERROR, message)

def log_warning(context: LoaderContext, message: str) -> None:
    """
    Log a warning-level message if logging level is WARNING or higher.

    Args:
        context: The loader context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.WARNING, message)

def log_info(context: LoaderContext, message: str) -> None:
    """
    Log an info-level message if logging level is INFO or higher.

    Args:
        context: The loader context containing logging level.
        message: The message to log.
    """
    log(context, LogLevel.INFO, message)


def log_debug(context: LoaderContext, message: str) -> None:
    log(context, LogLevel.DEBUG, message)
