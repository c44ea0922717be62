#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from tsc_rename import ExtensionRewriteRule


DEFAULT_CONFIG_FILE = "tsconfig.json"


@dataclass(frozen=True)
class LoaderOptions:
    """
    The caller's options that matter for configuration resolution.

    Attributes:
        compiler:               Name of the host compiler package (e.g. 'typescript').
        compiler_options:       Options that override those read from the config file.
        config_file:            Config file name to search for, or a path to it.
        append_ts_suffix_to:    Regexes; matching files are also visible as `<name>.ts`.
        append_tsx_suffix_to:   Regexes; matching files are also visible as `<name>.tsx`.
        extension_rewrites:     Additional rewrite rules, applied after the two lists above.
    """
    compiler: str = "typescript"
    compiler_options: Dict[str, Any] = field(default_factory=dict)
    config_file: str = DEFAULT_CONFIG_FILE
    append_ts_suffix_to: List[str] = field(default_factory=list)
    append_tsx_suffix_to: List[str] = field(default_factory=list)
    extension_rewrites: List[ExtensionRewriteRule] = field(default_factory=list)

    @property
    def rewrite_rules(self) -> Tuple[ExtensionRewriteRule, ...]:
        rules: List[ExtensionRewriteRule] = []
        if self.append_ts_suffix_to:
            rules.append(ExtensionRewriteRule.for_patterns(".ts", self.append_ts_suffix_to))
        if self.append_tsx_suffix_to:
            rules.append(ExtensionRewriteRule.for_patterns(".tsx", self.append_tsx_suffix_to))
        rules.extend(self.extension_rewrites)
        return tuple(rules)
