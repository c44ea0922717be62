#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import json
import sys
from pathlib import Path
from textwrap import dedent
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tsc_context import LoaderContext, LogLevel
from tsc_diagnostics import Diagnostic
from tsc_host import ConfigFile, ParsedConfiguration


class MemoryFileSystem:
    """
    In-memory FileSystem that records every call made to it.

    Directory listings return files in insertion order, which lets tests
    check that wrappers preserve the base ordering.
    """

    def __init__(self, files: Dict[str, str] | None = None, use_case_sensitive_file_names: bool = True):
        self.files: Dict[str, str] = dict(files or {})
        self.use_case_sensitive_file_names = use_case_sensitive_file_names
        self.calls: List[Tuple] = []

    def file_exists(self, path: str) -> bool:
        self.calls.append(("file_exists", path))
        return path in self.files

    def read_file(self, path: str) -> Optional[str]:
        self.calls.append(("read_file", path))
        return self.files.get(path)

    def read_directory(
            self,
            root_dir: str,
            extensions: Optional[Sequence[str]] = None,
            excludes: Optional[Sequence[str]] = None,
            includes: Optional[Sequence[str]] = None,
            depth: Optional[int] = None,
    ) -> List[str]:
        self.calls.append((
            "read_directory",
            root_dir,
            None if extensions is None else list(extensions),
            excludes,
            includes,
            depth,
        ))
        prefix = root_dir.rstrip("/") + "/"
        exts = tuple(e.lower() for e in (extensions or []))
        return [
            path for path in self.files
            if path.startswith(prefix) and (not exts or path.lower().endswith(exts))
        ]


class FakeHostCompiler:
    """
    Host compiler double: JSON config files, options passed through verbatim,
    file list taken from the host's '.ts'/'.tsx' listing of the base path.

    `broken` maps a config path to the raw options returned alongside a
    parse error for that file.
    """

    def __init__(self, fs: MemoryFileSystem, version: str = "5.0.0",
                 broken: Dict[str, dict] | None = None):
        self.version = version
        self.sys = fs
        self.broken = dict(broken or {})
        self.parse_calls: List[Tuple] = []

    def read_config_file(self, path, read_file) -> ConfigFile:
        text = read_file(path)
        if path in self.broken:
            return ConfigFile(
                config={"compilerOptions": dict(self.broken[path])},
                error=Diagnostic(kind="error", message="',' expected.", code="TS1005", line=3, column=5),
            )
        return ConfigFile(config=json.loads(text))

    def parse_json_config_file_content(self, config, host, base_path) -> ParsedConfiguration:
        self.parse_calls.append((config, host, base_path))
        return ParsedConfiguration(
            options=dict(config.get("compilerOptions", {})),
            file_names=host.read_directory(base_path, [".ts", ".tsx"]),
            raw=config,
        )


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def info_context() -> LoaderContext:
    return LoaderContext(log_level=LogLevel.INFO)


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def write_file(temp_project: Path):
    def _write(rel: str, content: str = "") -> Path:
        file_path = temp_project / rel
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(dedent(content), encoding="utf-8")
        return file_path

    return _write


def info_lines(err: str) -> List[str]:
    """Non-empty lines of captured log output."""
    return [line for line in err.splitlines() if line.strip()]
