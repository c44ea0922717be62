#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional


DIAGNOSTIC_CODE_FAMILIES = {
    "CFG": [
        "CFG-0010",  # config file found but failed to load
    ],
    # Reported by the local host compiler (tsc_json_host).
    "HST": [
        "HST-0010",  # file cannot be read
        "HST-0020",  # invalid JSON
        "HST-0021",  # top-level value is not an object
        "HST-0030",  # 'extends' is not supported
        "HST-0031",  # 'references' is not supported
        "HST-0040",  # 'compilerOptions' is not an object
        "HST-0041",  # 'files' / 'include' / 'exclude' is not a list of strings
        "HST-0050",  # no inputs were found
    ],
}


@dataclass(frozen=True)
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    code: Optional[str] = None
    filename: Optional[str] = None  # file path

    # Primary location
    line: Optional[int] = None
    column: Optional[int] = None

    # Return the one-line header
    def format(self) -> str:
        loc = ""
        if self.filename is not None:
            loc += f"{os.path.abspath(str(self.filename))}"
        if self.line is not None:
            loc += f":{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
        if loc:
            loc += ": "
        message = self.message
        if self.code is not None and f"[{self.code}]" not in message:
            message = f"[{self.code}] {message}"
        return f"{loc}{self.kind}: {message}"


def format_config_errors(
        errors: Iterable[Diagnostic],
        *,
        config_file_path: str,
) -> List[Diagnostic]:
    """
    Turn errors reported by the host compiler while reading a config file into
    presentable diagnostics attached to that file.

    The host's own code (if any) is kept in the message; the diagnostic itself
    is tagged CFG-0010 so callers can tell config failures apart from the rest.
    """
    formatted: List[Diagnostic] = []
    for err in errors:
        message = err.message
        if err.code is not None and f"[{err.code}]" not in message:
            message = f"[{err.code}] {message}"
        formatted.append(
            replace(
                err,
                kind="error",
                code="CFG-0010",
                message=f"config: {message}",
                filename=err.filename or config_file_path,
            )
        )
    return formatted
