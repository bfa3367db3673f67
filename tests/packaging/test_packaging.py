"""Packaging correctness verification for json-flatpath.

Tests validate:
- Top-level import exposes the documented public API
- py.typed marker ships inside the package
- pyproject.toml metadata agrees with the package

These tests inspect the source tree and current installation rather than
building a wheel.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    def test_import_json_flatpath(self) -> None:
        import json_flatpath

        assert hasattr(json_flatpath, "flatten")
        assert hasattr(json_flatpath, "Flattener")

    def test_flatten_basic(self) -> None:
        from json_flatpath import flatten

        assert flatten({"a": 1}).lineage() == ("/a_1",)

    def test_subpackages_import(self) -> None:
        from json_flatpath.algorithm import classify, merge_name
        from json_flatpath.tree import NodeBuilder

        assert callable(classify)
        assert callable(merge_name)
        assert NodeBuilder().build(1).kind == "int"


class TestSourceLayout:
    def test_py_typed_present(self) -> None:
        assert (PROJECT_ROOT / "src" / "json_flatpath" / "py.typed").is_file()

    def test_no_stray_packages(self) -> None:
        packages = {p.name for p in (PROJECT_ROOT / "src").iterdir() if p.is_dir()}
        assert "json_flatpath" in packages


class TestPackageMetadata:
    def test_version(self) -> None:
        import json_flatpath

        assert json_flatpath.__version__ == "0.1.0"

    def test_pyproject_version_matches(self) -> None:
        import json_flatpath

        with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
            pyproject = tomllib.load(fh)
        assert pyproject["project"]["name"] == "json-flatpath"
        assert pyproject["project"]["version"] == json_flatpath.__version__

    def test_all_exports(self) -> None:
        import json_flatpath

        expected = {
            "MISSING",
            "CollisionPolicy",
            "FlattenConfig",
            "FlattenError",
            "Flattener",
            "JsonNode",
            "LineageError",
            "MaxNestingExceededError",
            "Node",
            "NodeKind",
            "NodeReadError",
            "PathCollisionError",
            "TypeTag",
            "flatten",
            "loads",
        }
        actual = set(json_flatpath.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
