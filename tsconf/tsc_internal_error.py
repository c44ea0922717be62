#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

# tsc_internal_error.py
from __future__ import annotations

from typing import Optional


class ConfigInvariantError(RuntimeError):
    """
    Violated resolution invariant, i.e. a bug in tsconf or in its caller.
    Not for bad config files (those are Diagnostics).
    """

    def __init__(self, message: str, config_file_path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.config_file_path = config_file_path

    def format(self) -> str:
        message = self.message
        if not "[INV-" in message:
            message = f"[INV-9999] {message}"
        if self.config_file_path:
            return f"{self.config_file_path}: internal error: {message}"
        return f"internal error: {message}"
