#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from pathlib import Path

from conftest import MemoryFileSystem
from tsc_json_host import LocalSystem
from tsc_paths import ReferenceKind, classify_reference, find_config_file


def test_classify_absolute_path():
    assert classify_reference("/etc/project/tsconfig.json") is ReferenceKind.ABSOLUTE


def test_classify_relative_paths_both_separators():
    assert classify_reference("./tsconfig.build.json") is ReferenceKind.RELATIVE
    assert classify_reference("../shared/tsconfig.base.json") is ReferenceKind.RELATIVE
    assert classify_reference(".\\tsconfig.build.json") is ReferenceKind.RELATIVE
    assert classify_reference("..\\shared\\tsconfig.json") is ReferenceKind.RELATIVE


def test_classify_bare_names():
    assert classify_reference("tsconfig.json") is ReferenceKind.BARE_NAME
    # Not a relative reference: no separator right after the dots.
    assert classify_reference(".tsconfig.json") is ReferenceKind.BARE_NAME
    assert classify_reference("configs/tsconfig.json") is ReferenceKind.BARE_NAME


def test_bare_name_finds_nearest_ancestor(temp_project: Path, write_file):
    write_file("tsconfig.json", "{}")
    nearest = write_file("packages/app/tsconfig.json", "{}")
    (temp_project / "packages/app/src/components").mkdir(parents=True)

    found = find_config_file(
        LocalSystem(), str(temp_project / "packages/app/src/components"), "tsconfig.json"
    )

    assert found == str(nearest)


def test_bare_name_checks_every_ancestor_up_to_root():
    fs = MemoryFileSystem()

    found = find_config_file(fs, "/work/proj/src", "tsconfig.json")

    assert found is None
    assert fs.calls == [
        ("file_exists", "/work/proj/src/tsconfig.json"),
        ("file_exists", "/work/proj/tsconfig.json"),
        ("file_exists", "/work/tsconfig.json"),
        ("file_exists", "/tsconfig.json"),
    ]


def test_bare_name_found_at_root():
    fs = MemoryFileSystem({"/tsconfig.json": "{}"})

    assert find_config_file(fs, "/work/proj", "tsconfig.json") == "/tsconfig.json"


def test_absolute_reference_to_missing_file_is_none():
    fs = MemoryFileSystem()

    assert find_config_file(fs, "/work/proj", "/nowhere/tsconfig.json") is None
    assert fs.calls == [("file_exists", "/nowhere/tsconfig.json")]


def test_absolute_reference_is_returned_as_given():
    fs = MemoryFileSystem({"/configs/tsconfig.app.json": "{}"})

    assert find_config_file(fs, "/work/proj", "/configs/tsconfig.app.json") == "/configs/tsconfig.app.json"


def test_relative_reference_resolves_against_request_dir(temp_project: Path, write_file):
    base = write_file("shared/tsconfig.base.json", "{}")
    (temp_project / "app").mkdir()

    found = find_config_file(LocalSystem(), str(temp_project / "app"), "../shared/tsconfig.base.json")

    assert found == str(base)


def test_relative_reference_does_not_walk_up():
    # A file with the same name further up must not be picked.
    fs = MemoryFileSystem({"/work/tsconfig.build.json": "{}"})

    found = find_config_file(fs, "/work/proj/src", "./tsconfig.build.json")

    assert found is None
    assert fs.calls == [("file_exists", "/work/proj/src/tsconfig.build.json")]
