#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
import re
from enum import Enum, auto
from typing import Optional

from tsc_host import FileSystem


# One or two dots followed by either directory separator.
_RELATIVE_REFERENCE_RE = re.compile(r"^\.\.?[/\\]")


class ReferenceKind(Enum):
    ABSOLUTE = auto()
    RELATIVE = auto()
    BARE_NAME = auto()


def classify_reference(reference: str) -> ReferenceKind:
    """
    Classify a config file reference.

    - ABSOLUTE: an absolute path on this platform
    - RELATIVE: starts with './', '../', '.\\' or '..\\'
    - BARE_NAME: anything else, e.g. 'tsconfig.json'
    """
    if os.path.isabs(reference):
        return ReferenceKind.ABSOLUTE
    if _RELATIVE_REFERENCE_RE.match(reference) is not None:
        return ReferenceKind.RELATIVE
    return ReferenceKind.BARE_NAME


def find_config_file(fs: FileSystem, request_dir: str, reference: str) -> Optional[str]:
    """
    Find a config file by name or by path.

    By name, the file is found the same way `tsc` does it: starting in
    request_dir and continuing up the parent directory chain.
    By path, the file is resolved relative to request_dir (the directory of
    the entry file asking for the configuration).

    Returns the path of the config file, or None if none was found.
    """
    kind = classify_reference(reference)

    if kind is ReferenceKind.ABSOLUTE:
        return reference if fs.file_exists(reference) else None

    if kind is ReferenceKind.RELATIVE:
        resolved = os.path.abspath(os.path.join(request_dir, reference))
        return resolved if fs.file_exists(resolved) else None

    current = request_dir
    while True:
        candidate = os.path.join(current, reference)
        if fs.file_exists(candidate):
            return candidate
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent
