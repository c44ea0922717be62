"""
Capabilities tsconf consumes from the host compiler.

The host compiler is treated as an opaque capability set: a filesystem, a
config-file reader, a config-content parser and a version string. It is
always passed in explicitly so that different compiler versions (or test
doubles) can be used side by side.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from tsc_diagnostics import Diagnostic


class FileSystem(Protocol):
    """Filesystem queries used while locating and parsing configuration."""

    use_case_sensitive_file_names: bool

    def file_exists(self, path: str) -> bool: ...

    def read_file(self, path: str) -> Optional[str]: ...

    def read_directory(
            self,
            root_dir: str,
            extensions: Optional[Sequence[str]] = None,
            excludes: Optional[Sequence[str]] = None,
            includes: Optional[Sequence[str]] = None,
            depth: Optional[int] = None,
    ) -> List[str]: ...


@dataclass(frozen=True)
class ConfigFile:
    """
    A raw (parsed but not validated) configuration and the error, if any,
    reported while reading it.

    `config` has at least a "compilerOptions" mapping and a "files" list.
    Values are never mutated once built; merging produces a new ConfigFile.
    """
    config: Mapping[str, Any]
    error: Optional[Diagnostic] = None

    @staticmethod
    def empty() -> ConfigFile:
        """The configuration used when no config file exists."""
        return ConfigFile(config={"compilerOptions": {}, "files": []})

    @property
    def compiler_options(self) -> Dict[str, Any]:
        options = self.config.get("compilerOptions")
        return dict(options) if isinstance(options, Mapping) else {}


@dataclass(frozen=True)
class ParsedConfiguration:
    """
    Configuration expanded and validated by the host compiler.

    - options: normalized compiler options
    - file_names: expanded list of input files
    - errors: diagnostics reported while parsing
    - raw: the raw configuration the result was parsed from
    """
    options: Dict[str, Any]
    file_names: List[str] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    raw: Optional[Mapping[str, Any]] = None


class HostCompiler(Protocol):
    version: str
    sys: FileSystem

    def read_config_file(
            self, path: str, read_file: Callable[[str], Optional[str]]
    ) -> ConfigFile: ...

    def parse_json_config_file_content(
            self, config: Mapping[str, Any], host: FileSystem, base_path: str
    ) -> ParsedConfiguration: ...
