"""Tests for package.json loading and the last-run suggestion."""

from pathlib import Path

import pytest

from cli.runpick.errors import ManifestError
from cli.runpick.manifest import (
    LAST_RUN_LABEL,
    ScriptEntry,
    current_directory,
    load_catalog,
    merge_last_run,
)

BUILD = ScriptEntry("build", "tsc")
TEST = ScriptEntry("test", "jest")


class TestLoadCatalog:
    def test_sorted_by_name(self, project: Path):
        assert load_catalog(project) == [BUILD, TEST]

    def test_one_entry_per_script(self, tmp_path: Path, write_manifest):
        names = ["zeta", "Alpha", "beta", "alpha", "lint:fix", "_private"]
        write_manifest(tmp_path, {"scripts": {name: f"run {name}" for name in names}})

        catalog = load_catalog(tmp_path)
        assert len(catalog) == len(names)
        assert [entry.name for entry in catalog] == sorted(names)
        assert all(entry.description == "" for entry in catalog)

    def test_other_fields_ignored(self, tmp_path: Path, write_manifest):
        write_manifest(
            tmp_path,
            {"name": "x", "version": "1.0.0", "dependencies": {"a": "^1"}, "scripts": {}},
        )
        assert load_catalog(tmp_path) == []

    def test_byte_order_mark(self, tmp_path: Path):
        (tmp_path / "package.json").write_bytes(
            b"\xef\xbb\xbf" + b'{"scripts": {"test": "jest", "build": "tsc"}}'
        )
        assert load_catalog(tmp_path) == [BUILD, TEST]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="Error reading package.json file"):
            load_catalog(tmp_path)

    def test_invalid_json(self, tmp_path: Path, write_manifest):
        write_manifest(tmp_path, "{not json")
        with pytest.raises(ManifestError, match="Error parsing package.json file"):
            load_catalog(tmp_path)

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"name": "no-scripts"},
            {"scripts": ["build"]},
            {"scripts": {"build": 1}},
            {"scripts": {"build": None}},
        ],
    )
    def test_wrong_shape(self, tmp_path: Path, write_manifest, payload):
        write_manifest(tmp_path, payload)
        with pytest.raises(ManifestError, match="Error parsing package.json file"):
            load_catalog(tmp_path)


class TestCurrentDirectory:
    def test_returns_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert current_directory() == Path.cwd()

    def test_unavailable(self, monkeypatch):
        def broken():
            raise FileNotFoundError("gone")

        monkeypatch.setattr(Path, "cwd", staticmethod(broken))
        with pytest.raises(ManifestError, match="Error getting working directory path"):
            current_directory()


class TestMergeLastRun:
    def test_prepends_suggestion(self):
        merged = merge_last_run([BUILD, TEST], "build")
        assert merged == [ScriptEntry("build", "tsc", LAST_RUN_LABEL), BUILD, TEST]

    def test_stale_name_adds_nothing(self):
        assert merge_last_run([BUILD, TEST], "deploy") == [BUILD, TEST]

    def test_no_history(self):
        assert merge_last_run([BUILD, TEST], None) == [BUILD, TEST]

    def test_does_not_mutate_catalog(self):
        catalog = [BUILD, TEST]
        merge_last_run(catalog, "test")
        assert catalog == [BUILD, TEST]
