"""
Extension rewriting for non-native source files.

A rule such as `.vue -> .ts` lets `App.vue` be addressed as `App.vue.ts`
while resolving configuration, without copying or renaming anything on
disk. SuffixRemappingFileSystem applies the rules to every filesystem query
the host compiler makes while expanding a config file.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from tsc_host import FileSystem


@dataclass(frozen=True)
class ExtensionRewriteRule:
    """
    Make matching real files discoverable under `name + suffix`.

    A real file name matches when its (lower-cased) extension is one of
    `extensions`, or when any regex in `patterns` is found in it.
    """
    suffix: str
    extensions: FrozenSet[str] = frozenset()
    patterns: Tuple[re.Pattern[str], ...] = ()

    @staticmethod
    def for_extensions(suffix: str, extensions: Iterable[str]) -> ExtensionRewriteRule:
        return ExtensionRewriteRule(
            suffix=suffix,
            extensions=frozenset(ext.lower() for ext in extensions),
        )

    @staticmethod
    def for_patterns(suffix: str, patterns: Iterable[str | re.Pattern[str]]) -> ExtensionRewriteRule:
        return ExtensionRewriteRule(
            suffix=suffix,
            patterns=tuple(re.compile(p) if isinstance(p, str) else p for p in patterns),
        )

    def matches(self, file_name: str) -> bool:
        if os.path.splitext(file_name)[1].lower() in self.extensions:
            return True
        return any(p.search(file_name) for p in self.patterns)


def rename_file_path(file_name: str, rules: Sequence[ExtensionRewriteRule]) -> str:
    """Real name -> synthetic name, using the first matching rule."""
    for rule in rules:
        if rule.matches(file_name):
            return file_name + rule.suffix
    return file_name


def restore_file_path(file_name: str, rules: Sequence[ExtensionRewriteRule]) -> str:
    """Synthetic name -> real name; names no rule produced are returned unchanged."""
    for rule in rules:
        if not file_name.endswith(rule.suffix):
            continue
        real = file_name[: len(file_name) - len(rule.suffix)]
        # Only the first matching rule could have produced this name.
        if real and rename_file_path(real, rules) == file_name:
            return real
    return file_name


class SuffixRemappingFileSystem:
    """
    Wraps a FileSystem so that synthetic names resolve to the real files
    behind them and directory listings report synthetic names.
    """

    def __init__(self, base: FileSystem, rules: Sequence[ExtensionRewriteRule]):
        self.base = base
        self.rules = tuple(rules)

    @property
    def use_case_sensitive_file_names(self) -> bool:
        return self.base.use_case_sensitive_file_names

    def file_exists(self, path: str) -> bool:
        real = restore_file_path(path, self.rules)
        if self.base.file_exists(real):
            return True
        # A file literally named like a synthetic one still counts.
        return real != path and self.base.file_exists(path)

    def read_file(self, path: str) -> Optional[str]:
        real = restore_file_path(path, self.rules)
        text = self.base.read_file(real)
        if text is None and real != path:
            return self.base.read_file(path)
        return text

    def read_directory(
            self,
            root_dir: str,
            extensions: Optional[Sequence[str]] = None,
            excludes: Optional[Sequence[str]] = None,
            includes: Optional[Sequence[str]] = None,
            depth: Optional[int] = None,
    ) -> List[str]:
        requested = list(extensions or [])

        # The base filters on the real name, but callers ask for the synthetic
        # one: first find which real extensions rename into a requested one.
        extra: List[str] = []
        for file_name in self.base.read_directory(root_dir):
            renamed = rename_file_path(file_name, self.rules)
            if renamed == file_name:
                continue
            if os.path.splitext(renamed)[1].lower() not in requested:
                continue
            ext = os.path.splitext(file_name)[1].lower()
            if ext and ext not in requested and ext not in extra:
                extra.append(ext)

        found = self.base.read_directory(root_dir, requested + extra, excludes, includes, depth)
        return [rename_file_path(file_name, self.rules) for file_name in found]


def make_parse_config_host(fs: FileSystem, rules: Sequence[ExtensionRewriteRule]) -> FileSystem:
    """Return `fs` unchanged when there is nothing to rewrite, else wrap it."""
    if not rules:
        return fs
    return SuffixRemappingFileSystem(fs, rules)
