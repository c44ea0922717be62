#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import json

import pytest

from conftest import FakeHostCompiler, MemoryFileSystem, info_lines
from tsc_compat import CompilerCompatibility
from tsc_config import get_config_file, merge_compiler_options
from tsc_diagnostics import Diagnostic
from tsc_host import ConfigFile
from tsc_internal_error import ConfigInvariantError
from tsc_options import LoaderOptions

COMPATIBLE = CompilerCompatibility(compatible=True, details_message="tsconf: Using typescript@5.0.0")
INCOMPATIBLE = CompilerCompatibility(compatible=False, details_message="tsconf: Using typescript@2.0.0")


def make_compiler(files, **kwargs) -> FakeHostCompiler:
    return FakeHostCompiler(MemoryFileSystem(files), **kwargs)


def test_caller_options_take_precedence(info_context):
    compiler = make_compiler({
        "/proj/tsconfig.json": json.dumps({"compilerOptions": {"a": 1, "b": 2}, "files": ["x.ts"]}),
    })
    options = LoaderOptions(compiler_options={"b": 3, "c": 4})

    outcome = get_config_file(compiler, "/proj/src/index.ts", options, info_context, COMPATIBLE)

    assert outcome.config_file_path == "/proj/tsconfig.json"
    assert outcome.config_file_error is None
    assert outcome.config_file.config["compilerOptions"] == {"a": 1, "b": 3, "c": 4}
    assert outcome.config_file.config["files"] == ["x.ts"]


def test_nested_options_are_replaced_not_merged(info_context):
    compiler = make_compiler({
        "/proj/tsconfig.json": json.dumps({"compilerOptions": {"paths": {"@a/*": ["a/*"], "@b/*": ["b/*"]}}}),
    })
    options = LoaderOptions(compiler_options={"paths": {"@c/*": ["c/*"]}})

    outcome = get_config_file(compiler, "/proj/index.ts", options, info_context, COMPATIBLE)

    assert outcome.config_file.config["compilerOptions"] == {"paths": {"@c/*": ["c/*"]}}


def test_parse_error_skips_merge(info_context):
    compiler = make_compiler(
        {"/proj/tsconfig.json": "{ broken"},
        broken={"/proj/tsconfig.json": {"strict": True, "target": "es5"}},
    )
    options = LoaderOptions(compiler_options={"target": "es2020", "noEmit": True})

    outcome = get_config_file(compiler, "/proj/index.ts", options, info_context, COMPATIBLE)

    assert outcome.config_file_error is not None
    assert outcome.config_file_error.code == "CFG-0010"
    assert outcome.config_file_error.filename == "/proj/tsconfig.json"
    assert "[TS1005]" in outcome.config_file_error.message
    assert outcome.config_file.config["compilerOptions"] == {"strict": True, "target": "es5"}


def test_missing_config_uses_empty_default(info_context):
    compiler = make_compiler({})
    options = LoaderOptions(compiler_options={"strict": True})

    outcome = get_config_file(compiler, "/proj/src/index.ts", options, info_context, COMPATIBLE)

    assert outcome.config_file_path is None
    assert outcome.config_file_error is None
    assert outcome.config_file.config == {"compilerOptions": {"strict": True}, "files": []}


def test_explicit_config_path_is_used(info_context):
    compiler = make_compiler({
        "/proj/tsconfig.json": json.dumps({"compilerOptions": {"which": "default"}}),
        "/proj/tsconfig.build.json": json.dumps({"compilerOptions": {"which": "build"}}),
    })
    options = LoaderOptions(config_file="../tsconfig.build.json")

    outcome = get_config_file(compiler, "/proj/src/index.ts", options, info_context, COMPATIBLE)

    assert outcome.config_file_path == "/proj/tsconfig.build.json"
    assert outcome.config_file.config["compilerOptions"] == {"which": "build"}


def test_file_configuration_is_not_mutated():
    original = ConfigFile(config={"compilerOptions": {"a": 1}, "files": []})

    merged = merge_compiler_options(original, {"a": 2})

    assert original.config == {"compilerOptions": {"a": 1}, "files": []}
    assert merged.config == {"compilerOptions": {"a": 2}, "files": []}


def test_merge_over_failed_load_is_rejected():
    failed = ConfigFile(config={}, error=Diagnostic(kind="error", message="bad"))

    with pytest.raises(ConfigInvariantError):
        merge_compiler_options(failed, {"a": 1})


@pytest.mark.parametrize(
    "files, compatibility, expected",
    [
        ({"/proj/tsconfig.json": "{}"}, COMPATIBLE,
         "tsconf: Using typescript@5.0.0 and /proj/tsconfig.json"),
        ({"/proj/tsconfig.json": "{}"}, INCOMPATIBLE,
         "tsconf: Using config file at /proj/tsconfig.json"),
        ({}, COMPATIBLE, "tsconf: Using typescript@5.0.0"),
        ({}, INCOMPATIBLE, "tsconf: No config file found, using defaults"),
    ],
)
def test_exactly_one_info_message(capsys, info_context, files, compatibility, expected):
    compiler = make_compiler(files)

    get_config_file(compiler, "/proj/index.ts", LoaderOptions(), info_context, compatibility)

    assert info_lines(capsys.readouterr().err) == [expected]


def test_non_object_compiler_options_are_left_for_the_host():
    config_file = ConfigFile(config={"compilerOptions": "strict", "files": []})

    merged = merge_compiler_options(config_file, {"noEmit": True})

    assert merged is config_file
    assert config_file.compiler_options == {}
