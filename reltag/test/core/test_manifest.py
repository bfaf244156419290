"""Tests for reltag.core.manifest module."""

from __future__ import annotations

from pathlib import Path

from reltag.core.manifest import (
    read_manifest,
    read_version,
    replace_json_property,
    replace_json_version_property,
    write_manifest,
)
from reltag.core.result import Err, Ok

PACKAGE_JSON = """{
  "name": "my-app",
  "version": "1.0.0",
  "dependencies": {
    "left-pad": "1.3.0"
  }
}
"""


class TestReplaceJsonProperty:
    def test_replaces_version(self) -> None:
        assert replace_json_version_property('{"version": "1.0.0"}', "1.0.1") == (
            '{"version": "1.0.1"}'
        )

    def test_preserves_formatting(self) -> None:
        updated = replace_json_version_property(PACKAGE_JSON, "2.0.0")
        assert updated == PACKAGE_JSON.replace('"1.0.0"', '"2.0.0"', 1)

    def test_absent_property_leaves_content(self) -> None:
        assert replace_json_property('{"name": "x"}', "version", "1.0.0") == '{"name": "x"}'

    def test_other_property(self) -> None:
        assert replace_json_property(PACKAGE_JSON, "name", "renamed").startswith(
            '{\n  "name": "renamed",'
        )

    def test_value_without_string_literal(self) -> None:
        assert replace_json_property('{"version": 1}', "version", "2") == '{"version": 1}'


class TestReadVersion:
    def test_reads_version(self) -> None:
        assert read_version(PACKAGE_JSON) == "1.0.0"

    def test_missing_version(self) -> None:
        assert read_version('{"name": "x"}') is None

    def test_invalid_json(self) -> None:
        assert read_version("{not json") is None

    def test_non_object_root(self) -> None:
        assert read_version('["1.0.0"]') is None


class TestManifestFiles:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"

        assert write_manifest(path, PACKAGE_JSON) == Ok(None)
        assert read_manifest(path) == Ok(PACKAGE_JSON)

    def test_missing_manifest(self, tmp_path: Path) -> None:
        result = read_manifest(tmp_path / "package.json")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_write_into_missing_directory(self, tmp_path: Path) -> None:
        result = write_manifest(tmp_path / "missing" / "package.json", "{}")

        assert isinstance(result, Err)
        assert "Cannot write manifest" in result.error.message
