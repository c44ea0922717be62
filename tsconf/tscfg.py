#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import argparse
import json
import os
from typing import Any, Iterable, Tuple

from tsc_config import resolve_configuration
from tsc_context import LoaderContext, LogLevel
from tsc_diagnostics import Diagnostic
from tsc_json_host import LOCAL_HOST_VERSION, LocalHostCompiler
from tsc_logger import log_error, log_warning
from tsc_options import DEFAULT_CONFIG_FILE, LoaderOptions
from tsc_paths import find_config_file


def print_diagnostics(diagnostics: Iterable[Diagnostic], context: LoaderContext) -> None:
    for diag in diagnostics:
        if diag.kind == "error":
            log_error(context, diag.format())
        else:
            log_warning(context, diag.format())


def parse_compiler_option(text: str) -> Tuple[str, Any]:
    """Parse KEY=VALUE; VALUE is read as JSON when possible, else kept as a string."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def build_loader_context(args: argparse.Namespace) -> LoaderContext:
    """Build a LoaderContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return LoaderContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
        silent=getattr(args, 'silent', False),
    )


def build_loader_options(args: argparse.Namespace) -> LoaderOptions:
    return LoaderOptions(
        compiler=args.compiler,
        compiler_options=dict(args.compiler_option),
        config_file=args.config_file,
        append_ts_suffix_to=list(args.append_ts_suffix_to),
        append_tsx_suffix_to=list(args.append_tsx_suffix_to),
    )


def cmd_find(args: argparse.Namespace) -> int:
    """Print the config file governing an entry file."""
    context = build_loader_context(args)
    options = build_loader_options(args)
    compiler = LocalHostCompiler(version=args.host_version)

    entry = os.path.abspath(args.entry)
    path = find_config_file(compiler.sys, os.path.dirname(entry), options.config_file)
    if path is None:
        log_error(context, f"No config file '{options.config_file}' found for {entry}")
        return 1
    print(path)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print the fully resolved configuration of an entry file as JSON."""
    context = build_loader_context(args)
    options = build_loader_options(args)
    compiler = LocalHostCompiler(version=args.host_version)

    resolved = resolve_configuration(compiler, os.path.abspath(args.entry), options, context)
    if resolved.config_file_error is not None:
        print_diagnostics([resolved.config_file_error], context)
        return 1

    parse_result = resolved.parse_result
    print_diagnostics(parse_result.errors, context)
    print(json.dumps(
        {
            "configFilePath": resolved.config_file_path,
            "compilerOptions": parse_result.options,
            "files": parse_result.file_names,
        },
        indent=2,
    ))
    return 1 if resolved.has_errors() else 0


def _add_entry_arg(parser: argparse.ArgumentParser) -> None:
    """Add the entry file argument."""
    parser.add_argument("entry", help="Entry file whose configuration is resolved (e.g. 'src/main.ts')")


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    """Add the caller options that shape configuration resolution."""
    parser.add_argument(
        "--config-file", "-c",
        default=DEFAULT_CONFIG_FILE,
        help=f"Config file name to search for, or a path to it (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--compiler-option", "-O",
        action="append",
        default=[],
        type=parse_compiler_option,
        metavar="KEY=VALUE",
        help="Override a compiler option; VALUE is JSON (can be passed multiple times)",
    )
    parser.add_argument(
        "--append-ts-suffix-to",
        action="append",
        default=[],
        metavar="REGEX",
        help="Make files matching REGEX visible as '<name>.ts' (can be passed multiple times)",
    )
    parser.add_argument(
        "--append-tsx-suffix-to",
        action="append",
        default=[],
        metavar="REGEX",
        help="Make files matching REGEX visible as '<name>.tsx' (can be passed multiple times)",
    )
    parser.add_argument(
        "--compiler",
        default="typescript",
        help="Name of the host compiler (default: typescript)",
    )
    parser.add_argument(
        "--host-version",
        default=LOCAL_HOST_VERSION,
        help=f"Host compiler version to emulate (default: {LOCAL_HOST_VERSION})",
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="tscfg", description="Locate and resolve compiler configuration")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")
    parser.add_argument("-s", "--silent",
                        action='store_true',
                        default=False,
                        help="Suppress all log output")

    ###########################
    # find command
    ###########################
    p_find = subparsers.add_parser("find", help="Print the config file used for an entry file")
    _add_config_args(p_find)
    _add_entry_arg(p_find)
    p_find.set_defaults(func=cmd_find)

    ###########################
    # show command
    ###########################
    p_show = subparsers.add_parser("show", help="Print the resolved configuration as JSON", aliases=["show-config"])
    _add_config_args(p_show)
    _add_entry_arg(p_show)
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
