"""Shared fixtures."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_manifest():
    def _write(directory: Path, payload) -> Path:
        path = directory / "package.json"
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project(tmp_path: Path, write_manifest) -> Path:
    directory = tmp_path / "project"
    directory.mkdir()
    write_manifest(directory, {"name": "demo", "scripts": {"test": "jest", "build": "tsc"}})
    return directory
