from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Set, Union

import utils
from configuration import Configuration as Config
from errors import ManifestSchemaError, ManifestSyntaxError
from loggers.main_logger import main_logger as logger
from models.enums import DependencyScope
from models.manifest import AllowList, make_allow_list


def allow_list_source_path(root: Union[str, Path]) -> Path:
    """The project manifest one level above the scan root (<root>/../package.json)."""
    return Path(root, Config.allow_list_source_parent, Config.manifest_file_name)


def _dependency_names(data: dict, scope: DependencyScope, path: Path) -> Set[str]:
    section: Any = data.get(scope.value)
    if section is None:
        return set()
    if not isinstance(section, dict):
        raise ManifestSchemaError(path, scope.value, f"is {utils.json_type_name(section)}, expected object")
    return set(section.keys())


def read_allow_list(root: Union[str, Path], scopes: Iterable[DependencyScope]) -> AllowList:
    """
    Build the allow-list from the project manifest's dependency sections.

    Names from every requested scope are merged. An absent section contributes
    nothing; the file itself must exist and be a JSON object.
    """
    scope_list: List[DependencyScope] = list(scopes)
    if not scope_list:
        return make_allow_list()

    path = allow_list_source_path(root)
    data = utils.read_json_file(path)
    if not isinstance(data, dict):
        raise ManifestSyntaxError(path, f"top-level value is {utils.json_type_name(data)}, expected object")

    names: Set[str] = set()
    for scope in scope_list:
        scope_names = _dependency_names(data, scope, path)
        logger.info(f"{len(scope_names)} name(s) in {scope.value} of {path}")
        names.update(scope_names)

    if not names:
        logger.warning(f"No {'/'.join(s.value for s in scope_list)} declared in {path}; reporting every manifest")
    return make_allow_list(names)
