"""
Host compiler version negotiation.

Everything that depends on the host compiler's version is decided here, once
per host, so that call sites only consult boolean capabilities.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from tsc_context import LoaderContext
from tsc_logger import log_error, log_warning

# Hosts at or above this version consult options.configFilePath.
CONFIG_FILE_PATH_OPTION_VERSION = (3, 5, 0)

# Oldest 'typescript' release tsconf is known to work with.
MIN_COMPATIBLE_VERSION = (3, 6, 3)

_VERSION_RE = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-([0-9A-Za-z.-]+))?")


def parse_version(version: str) -> Tuple[int, int, int, int]:
    """
    Parse 'MAJOR.MINOR.PATCH[-PRERELEASE]' into a comparable tuple.

    The last element is 1 for releases and 0 for pre-releases, so that
    '3.5.0-beta' < '3.5.0', as in semver. Raises ValueError on garbage.
    """
    m = _VERSION_RE.match(version or "")
    if m is None:
        raise ValueError(f"Invalid version string: {version!r}")
    major, minor, patch, pre = m.groups()
    return (int(major), int(minor or 0), int(patch or 0), 0 if pre else 1)


def version_at_least(version: str, minimum: Tuple[int, int, int]) -> bool:
    return parse_version(version) >= (*minimum, 1)


@dataclass(frozen=True)
class HostCapabilities:
    version: str
    supports_config_file_path_option: bool

    @staticmethod
    def from_version(version: str) -> HostCapabilities:
        """Unparseable versions support nothing."""
        try:
            supported = version_at_least(version, CONFIG_FILE_PATH_OPTION_VERSION)
        except ValueError:
            supported = False
        return HostCapabilities(version=version, supports_config_file_path_option=supported)


@dataclass(frozen=True)
class CompilerCompatibility:
    compatible: bool
    details_message: str


def check_compiler(compiler_name: str, version: str, context: LoaderContext) -> CompilerCompatibility:
    """
    Decide whether the host compiler is one tsconf knows how to drive.

    Only 'typescript' >= MIN_COMPATIBLE_VERSION counts as compatible. An older
    'typescript' is reported as an error, any other compiler as a warning.
    """
    details = f"tsconf: Using {compiler_name}@{version}"

    if compiler_name != "typescript":
        log_warning(context, f"{details}. This version may or may not be compatible with tsconf.")
        return CompilerCompatibility(compatible=False, details_message=details)

    try:
        compatible = version_at_least(version, MIN_COMPATIBLE_VERSION)
    except ValueError:
        compatible = False
    if not compatible:
        log_error(context, f"{details}. This version is incompatible with tsconf. "
                           f"Please upgrade to the latest version of TypeScript.")
    return CompilerCompatibility(compatible=compatible, details_message=details)
