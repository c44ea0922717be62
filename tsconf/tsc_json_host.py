"""
Local stand-in for the host compiler capabilities.

LocalSystem is the filesystem capability on top of `os`; LocalHostCompiler
reads tsconfig-style JSON (comments and trailing commas allowed) and expands
`files` / `include` / `exclude` through whatever FileSystem it is handed, so
that suffix remapping applies to it exactly as it would to the real host.

It deliberately does not follow `extends` or project references; those are
reported as warnings.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import json
import os
import re
import sys
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from tsc_diagnostics import Diagnostic
from tsc_host import ConfigFile, FileSystem, ParsedConfiguration

# Version of the config contract this host follows.
LOCAL_HOST_VERSION = "5.0.0"

DEFAULT_INCLUDE = ["**/*"]
DEFAULT_EXCLUDE = ["node_modules", "bower_components", "jspm_packages"]
SUPPORTED_TS_EXTENSIONS = [".ts", ".tsx"]
SUPPORTED_JS_EXTENSIONS = [".js", ".jsx"]

# Compiler options holding paths, made absolute against the base path.
PATH_OPTIONS = ("baseUrl", "declarationDir", "outDir", "outFile", "rootDir", "tsBuildInfoFile")

_GLOB_CHARS = set("*?")


def strip_json_comments(text: str) -> str:
    """
    Remove // and /* */ comments and trailing commas from JSON text.

    Removed characters are replaced by spaces (newlines are kept), so line and
    column numbers reported by the JSON parser still point into the original.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            while i < n and text[i] != "\n":
                out.append(" ")
                i += 1
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.extend("\n" if c == "\n" else " " for c in text[i:end])
            i = end
        else:
            out.append(ch)
            i += 1
    return _strip_trailing_commas("".join(out))


def _strip_trailing_commas(text: str) -> str:
    out = list(text)
    in_string = False
    pending_comma: Optional[int] = None
    i = 0
    while i < len(text):
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            pending_comma = None
        elif ch == ",":
            pending_comma = i
        elif ch in "}]":
            if pending_comma is not None:
                out[pending_comma] = " "
            pending_comma = None
        elif ch not in " \t\r\n":
            pending_comma = None
        i += 1
    return "".join(out)


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/")


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Translate a tsconfig glob: '**/' spans zero or more directories, while
    '*' and '?' stay within a single path component.
    """
    out: List[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(out))


def _glob_match(rel_path: str, pattern: str) -> bool:
    return _glob_to_regex(pattern).fullmatch(rel_path) is not None


def _include_pattern(pattern: str) -> str:
    """A wildcard-free, extension-less last component names a directory."""
    pattern = _normalize_pattern(pattern)
    last = pattern.rsplit("/", 1)[-1]
    if not (_GLOB_CHARS & set(last)) and "." not in last:
        return f"{pattern}/**/*" if pattern else "**/*"
    return pattern


def _is_excluded(rel_path: str, excludes: Sequence[str]) -> bool:
    for pattern in excludes:
        pattern = _normalize_pattern(pattern)
        if _glob_match(rel_path, pattern):
            return True
        if rel_path.startswith(pattern + "/"):
            return True
    return False


class LocalSystem:
    """FileSystem capability on the local disk."""

    def __init__(self, use_case_sensitive_file_names: bool | None = None):
        if use_case_sensitive_file_names is None:
            use_case_sensitive_file_names = sys.platform not in ("win32", "darwin")
        self.use_case_sensitive_file_names = use_case_sensitive_file_names

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_file(self, path: str) -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                return f.read()
        except (OSError, UnicodeDecodeError):
            return None

    def read_directory(
            self,
            root_dir: str,
            extensions: Optional[Sequence[str]] = None,
            excludes: Optional[Sequence[str]] = None,
            includes: Optional[Sequence[str]] = None,
            depth: Optional[int] = None,
    ) -> List[str]:
        """
        List files under root_dir in sorted, depth-first order.

        - extensions: keep files ending with one of these (case-insensitive)
        - excludes: glob patterns relative to root_dir; matching directories are pruned
        - includes: glob patterns relative to root_dir; a file must match one
        - depth: number of directory levels to visit (1 = root_dir only)
        """
        exts = [e.lower() for e in (extensions or [])]
        include_patterns = [_include_pattern(p) for p in includes] if includes else None
        results: List[str] = []

        def visit(rel_dir: str, remaining: Optional[int]) -> None:
            abs_dir = os.path.join(root_dir, rel_dir) if rel_dir else root_dir
            try:
                entries = sorted(os.listdir(abs_dir))
            except OSError:
                return
            subdirs: List[str] = []
            for name in entries:
                rel = f"{rel_dir}/{name}" if rel_dir else name
                full = os.path.join(abs_dir, name)
                if os.path.isdir(full):
                    subdirs.append(rel)
                    continue
                if exts and not name.lower().endswith(tuple(exts)):
                    continue
                if excludes and _is_excluded(rel, excludes):
                    continue
                if include_patterns is not None and not any(_glob_match(rel, p) for p in include_patterns):
                    continue
                results.append(os.path.join(root_dir, *rel.split("/")))

            if remaining is not None:
                remaining -= 1
                if remaining <= 0:
                    return
            for rel in subdirs:
                if excludes and _is_excluded(rel, excludes):
                    continue
                visit(rel, remaining)

        visit("", depth)
        return results


class LocalHostCompiler:
    """
    Host compiler capabilities for tsconfig-style JSON, implemented locally.
    """

    def __init__(self, version: str = LOCAL_HOST_VERSION, system: FileSystem | None = None):
        self.version = version
        self.sys = system if system is not None else LocalSystem()

    def read_config_file(self, path: str, read_file: Callable[[str], Optional[str]]) -> ConfigFile:
        text = read_file(path)
        if text is None:
            return ConfigFile(
                config={},
                error=Diagnostic(kind="error", message=f"Cannot read file '{path}'.",
                                 code="HST-0010", filename=path),
            )
        text = text.removeprefix("\ufeff")
        try:
            config = json.loads(strip_json_comments(text)) if text.strip() else {}
        except json.JSONDecodeError as e:
            return ConfigFile(
                config={},
                error=Diagnostic(kind="error", message=e.msg, code="HST-0020",
                                 filename=path, line=e.lineno, column=e.colno),
            )
        if not isinstance(config, dict):
            return ConfigFile(
                config={},
                error=Diagnostic(kind="error", message="Config file must contain a JSON object.",
                                 code="HST-0021", filename=path),
            )
        return ConfigFile(config=config)

    def parse_json_config_file_content(
            self, config: Mapping[str, Any], host: FileSystem, base_path: str
    ) -> ParsedConfiguration:
        errors: List[Diagnostic] = []

        def string_list(key: str) -> Optional[List[str]]:
            if key not in config:
                return None
            value = config[key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                errors.append(Diagnostic(kind="error", code="HST-0041",
                                         message=f"'{key}' must be a list of strings."))
                return []
            return list(value)

        if "extends" in config:
            errors.append(Diagnostic(kind="warning", code="HST-0030",
                                     message="'extends' is not supported by the local host and was ignored."))
        if "references" in config:
            errors.append(Diagnostic(kind="warning", code="HST-0031",
                                     message="'references' is not supported by the local host and was ignored."))

        raw_options = config.get("compilerOptions", {})
        if not isinstance(raw_options, dict):
            errors.append(Diagnostic(kind="error", code="HST-0040",
                                     message="'compilerOptions' must be an object."))
            raw_options = {}
        options: Dict[str, Any] = dict(raw_options)
        for key in PATH_OPTIONS:
            if isinstance(options.get(key), str):
                options[key] = os.path.normpath(os.path.join(base_path, options[key]))

        files = string_list("files")
        includes = string_list("include")
        excludes = string_list("exclude")
        if includes is None and files is None:
            includes = list(DEFAULT_INCLUDE)
        if excludes is None:
            excludes = list(DEFAULT_EXCLUDE)
            if isinstance(options.get("outDir"), str):
                excludes.append(os.path.relpath(options["outDir"], base_path))

        extensions = list(SUPPORTED_TS_EXTENSIONS)
        if options.get("allowJs"):
            extensions += SUPPORTED_JS_EXTENSIONS

        file_names: List[str] = []
        seen = set()

        def add(file_name: str) -> None:
            key = file_name if host.use_case_sensitive_file_names else file_name.lower()
            if key not in seen:
                seen.add(key)
                file_names.append(file_name)

        for f in files or []:
            add(os.path.normpath(os.path.join(base_path, f)))
        if includes:
            for f in host.read_directory(base_path, extensions, excludes, includes):
                add(f)

        if not file_names and "files" not in config and "references" not in config:
            errors.append(Diagnostic(
                kind="error", code="HST-0050",
                message=f"No inputs were found in config file. Specified 'include' paths were "
                        f"{json.dumps(includes or [])} and 'exclude' paths were {json.dumps(excludes)}.",
            ))

        return ParsedConfiguration(options=options, file_names=file_names, errors=errors, raw=config)
