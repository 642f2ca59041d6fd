"""Tests for project loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from layr_search.core.errors import ProjectLoadError
from layr_search.core.loader import load_project, parse_project

_FILES = {
    "components": {"home": {"name": "home", "nodes": {}}},
    "formulas": {},
    "actions": {},
    "packages": {},
}


class TestParseProject:
    def test_envelope(self) -> None:
        files = parse_project({"files": _FILES})
        assert list(files.components) == ["home"]

    def test_bare_files(self) -> None:
        assert list(parse_project(_FILES).components) == ["home"]

    def test_missing_sections_default_to_empty(self) -> None:
        files = parse_project({"files": {}})
        assert files.components == {} and files.packages == {}

    def test_non_object(self) -> None:
        with pytest.raises(ProjectLoadError):
            parse_project([1, 2])

    def test_files_not_object(self) -> None:
        with pytest.raises(ProjectLoadError) as exc_info:
            parse_project({"files": "nope"})
        assert exc_info.value.context is not None
        assert exc_info.value.context.path == ("files",)

    def test_validation_error_carries_location(self) -> None:
        with pytest.raises(ProjectLoadError) as exc_info:
            parse_project({"components": ["home"]})
        context = exc_info.value.context
        assert context is not None
        assert context.path[:1] == ("components",)

    def test_null_sections_read_as_empty(self) -> None:
        files = parse_project({"components": None, "packages": None})
        assert files.components == {} and files.packages == {}

    def test_malformed_component_fields_read_as_empty(self) -> None:
        files = parse_project(
            {"components": {"home": {"name": "home", "nodes": [], "attributes": None}}}
        )
        home = files.components["home"]
        assert home is not None
        assert home.nodes == {} and home.attributes == {}


class TestLoadProject:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "project.json"
        path.write_text(json.dumps({"files": _FILES}))
        assert list(load_project(path).components) == ["home"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectLoadError, match="Cannot read project"):
            load_project(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "project.json"
        path.write_text("{not json")
        with pytest.raises(ProjectLoadError, match="Invalid JSON"):
            load_project(path)

    def test_json_nested_too_deeply(self, tmp_path: Path) -> None:
        path = tmp_path / "project.json"
        path.write_text("[" * 200_000 + "]" * 200_000)
        with pytest.raises(ProjectLoadError, match="nested too deeply"):
            load_project(path)
