#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from tsc_compat import CompilerCompatibility, HostCapabilities, check_compiler
from tsc_context import LoaderContext
from tsc_diagnostics import Diagnostic, format_config_errors
from tsc_host import ConfigFile, HostCompiler, ParsedConfiguration
from tsc_internal_error import ConfigInvariantError
from tsc_logger import log_debug, log_info
from tsc_options import LoaderOptions
from tsc_paths import find_config_file
from tsc_rename import make_parse_config_host


@dataclass(frozen=True)
class ConfigLoadOutcome:
    """
    Result of locating and reading the config file for one entry file.

    config_file_error is set exactly when a config file was found but could
    not be read; config_file then holds the file's own (unmerged) options.
    """
    config_file_path: Optional[str]
    config_file: ConfigFile
    config_file_error: Optional[Diagnostic] = None


@dataclass(frozen=True)
class ResolvedConfiguration:
    config_file_path: Optional[str]
    config_file: ConfigFile
    config_file_error: Optional[Diagnostic]
    parse_result: Optional[ParsedConfiguration]

    def has_errors(self) -> bool:
        if self.config_file_error is not None:
            return True
        return self.parse_result is not None and any(
            d.kind == "error" for d in self.parse_result.errors
        )


def merge_compiler_options(config_file: ConfigFile, overrides: Mapping[str, Any]) -> ConfigFile:
    """
    Overlay caller options on the file's compiler options (one level deep;
    caller values replace nested objects wholesale). Returns a new ConfigFile.
    """
    if config_file.error is not None:
        raise ConfigInvariantError("cannot merge compiler options over a config file that failed to load")
    file_options = config_file.config.get("compilerOptions")
    if file_options is not None and not isinstance(file_options, Mapping):
        # Left as is for the host parser to report.
        return config_file
    merged: Dict[str, Any] = {**config_file.compiler_options, **overrides}
    return replace(config_file, config={**config_file.config, "compilerOptions": merged})


def get_config_file(
        compiler: HostCompiler,
        loader_path: str,
        options: LoaderOptions,
        context: LoaderContext,
        compatibility: CompilerCompatibility,
) -> ConfigLoadOutcome:
    """
    Locate and read the config file governing `loader_path`, then overlay
    the caller's compiler options on it.

    Exactly one info message is logged per call.
    """
    config_file_path = find_config_file(
        compiler.sys, os.path.dirname(loader_path), options.config_file
    )
    config_file_error: Optional[Diagnostic] = None

    if config_file_path is not None:
        if compatibility.compatible:
            log_info(context, f"{compatibility.details_message} and {config_file_path}")
        else:
            log_info(context, f"tsconf: Using config file at {config_file_path}")

        config_file = compiler.read_config_file(config_file_path, compiler.sys.read_file)

        if config_file.error is not None:
            config_file_error = format_config_errors(
                [config_file.error], config_file_path=config_file_path
            )[0]
    else:
        if compatibility.compatible:
            log_info(context, compatibility.details_message)
        else:
            log_info(context, "tsconf: No config file found, using defaults")

        config_file = ConfigFile.empty()

    if config_file_error is None:
        config_file = merge_compiler_options(config_file, options.compiler_options)

    return ConfigLoadOutcome(
        config_file_path=config_file_path,
        config_file=config_file,
        config_file_error=config_file_error,
    )


def get_config_parse_result(
        compiler: HostCompiler,
        config_file: ConfigFile,
        base_path: str,
        config_file_path: Optional[str],
        options: LoaderOptions,
        capabilities: HostCapabilities,
) -> ParsedConfiguration:
    """
    Let the host compiler expand and validate the raw configuration, going
    through the suffix-remapping filesystem when rewrite rules are active.
    """
    host = make_parse_config_host(compiler.sys, options.rewrite_rules)
    parse_result = compiler.parse_json_config_file_content(config_file.config, host, base_path)

    if capabilities.supports_config_file_path_option:
        # Internal host option recording where the configuration was read from.
        parse_result = replace(
            parse_result,
            options={**parse_result.options, "configFilePath": config_file_path},
        )

    return parse_result


def resolve_configuration(
        compiler: HostCompiler,
        loader_path: str,
        options: LoaderOptions,
        context: LoaderContext | None = None,
) -> ResolvedConfiguration:
    """
    Full pipeline for one entry file:

      1. Check the host compiler and negotiate its capabilities.
      2. Locate, read and merge the config file.
      3. Unless loading failed, have the host parse the merged configuration.

    The base path for parsing is the config file's directory, or the entry
    file's directory when no config file exists.
    """
    context = context or LoaderContext.default()
    compatibility = check_compiler(options.compiler, compiler.version, context)
    capabilities = HostCapabilities.from_version(compiler.version)

    outcome = get_config_file(compiler, loader_path, options, context, compatibility)
    if outcome.config_file_error is not None:
        return ResolvedConfiguration(
            config_file_path=outcome.config_file_path,
            config_file=outcome.config_file,
            config_file_error=outcome.config_file_error,
            parse_result=None,
        )

    if outcome.config_file_path is not None:
        base_path = os.path.dirname(outcome.config_file_path)
    else:
        base_path = os.path.dirname(loader_path)
    log_debug(context, f"Parsing configuration relative to {base_path}")

    parse_result = get_config_parse_result(
        compiler,
        outcome.config_file,
        base_path,
        outcome.config_file_path,
        options,
        capabilities,
    )
    log_debug(context, f"Configuration lists {len(parse_result.file_names)} file(s), "
                       f"{len(parse_result.errors)} diagnostic(s)")

    return ResolvedConfiguration(
        config_file_path=outcome.config_file_path,
        config_file=outcome.config_file,
        config_file_error=None,
        parse_result=parse_result,
    )
