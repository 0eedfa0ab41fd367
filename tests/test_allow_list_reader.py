import json
from pathlib import Path

import pytest

from errors import ManifestReadError, ManifestSchemaError, ManifestSyntaxError
from models.enums import DependencyScope
from tools.allow_list_reader import allow_list_source_path, read_allow_list


def _project_manifest(node_modules: Path, data) -> Path:
    path = node_modules.parent / "package.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_source_is_one_level_above_root(node_modules: Path):
    path = allow_list_source_path(node_modules)

    assert path.resolve() == (node_modules.parent / "package.json").resolve()


def test_direct_dependencies(node_modules: Path):
    _project_manifest(node_modules, {"dependencies": {"a": "^1", "b": "2"}, "devDependencies": {"jest": "*"}})

    assert read_allow_list(node_modules, [DependencyScope.DIRECT]) == frozenset({"a", "b"})


def test_dev_dependencies(node_modules: Path):
    _project_manifest(node_modules, {"dependencies": {"a": "^1"}, "devDependencies": {"jest": "*"}})

    assert read_allow_list(node_modules, [DependencyScope.DEV]) == frozenset({"jest"})


def test_both_scopes_are_merged(node_modules: Path):
    _project_manifest(node_modules, {"dependencies": {"a": "^1"}, "devDependencies": {"jest": "*", "a": "^1"}})

    names = read_allow_list(node_modules, [DependencyScope.DIRECT, DependencyScope.DEV])

    assert names == frozenset({"a", "jest"})


def test_no_scopes_means_no_allow_list(node_modules: Path):
    # the project manifest is not even read
    assert read_allow_list(node_modules, []) == frozenset()


def test_absent_section_contributes_nothing(node_modules: Path):
    _project_manifest(node_modules, {"dependencies": {"a": "^1"}})

    assert read_allow_list(node_modules, [DependencyScope.DEV]) == frozenset()


def test_missing_project_manifest(node_modules: Path):
    with pytest.raises(ManifestReadError):
        read_allow_list(node_modules, [DependencyScope.DIRECT])


def test_malformed_project_manifest(node_modules: Path):
    (node_modules.parent / "package.json").write_text("{nope", encoding="utf-8")

    with pytest.raises(ManifestSyntaxError):
        read_allow_list(node_modules, [DependencyScope.DIRECT])


def test_section_must_be_an_object(node_modules: Path):
    _project_manifest(node_modules, {"dependencies": ["a", "b"]})

    with pytest.raises(ManifestSchemaError, match="'dependencies' is array"):
        read_allow_list(node_modules, [DependencyScope.DIRECT])
