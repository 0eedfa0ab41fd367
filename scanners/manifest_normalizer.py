from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import utils
from errors import ManifestSchemaError, ManifestSyntaxError
from loggers.scan_logger import scan_logger as logger
from models.enums import LicenseShape
from models.manifest import AllowList, ManifestRecord

# Fields that are always plain strings in a well-formed manifest
TEXT_FIELDS = ("name", "version", "description", "homepage")
MANIFEST_FIELDS = TEXT_FIELDS + ("license",)


# --- license normalization ---

def classify_license(raw: Any) -> LicenseShape:
    if raw is None:
        return LicenseShape.ABSENT
    if isinstance(raw, str):
        return LicenseShape.TEXT
    if isinstance(raw, dict):
        return LicenseShape.OBJECT
    if isinstance(raw, list):
        return LicenseShape.LIST
    return LicenseShape.UNSUPPORTED


def _license_type(obj: Dict[str, Any], path: str) -> str:
    t = obj.get("type")
    if not isinstance(t, str):
        reason = "object has no 'type' key" if t is None else f"'type' is {utils.json_type_name(t)}, expected string"
        raise ManifestSchemaError(path, "license", reason)
    return t


def _from_absent(raw: Any, path: str) -> str:
    return ""


def _from_text(raw: str, path: str) -> str:
    return raw


def _from_object(raw: Dict[str, Any], path: str) -> str:
    return _license_type(raw, path)


def _from_list(raw: list, path: str) -> str:
    """
    Deprecated "licenses"-style arrays, e.g.
      [{"type": "MIT", "url": "..."}, {"type": "Apache-2.0", ...}]
    or
      ["MIT", "Apache-2.0"]
    Only the first entry is reported.
    """
    if not raw:
        raise ManifestSchemaError(path, "license", "is an empty array")
    first = raw[0]
    if isinstance(first, str):
        return first
    if isinstance(first, dict):
        return _license_type(first, path)
    raise ManifestSchemaError(
        path, "license", f"array starts with {utils.json_type_name(first)}, expected string or object"
    )


def _from_unsupported(raw: Any, path: str) -> str:
    raise ManifestSchemaError(
        path, "license", f"property type is neither a string, object or array. Found type: {utils.json_type_name(raw)}"
    )


LICENSE_RESOLVERS: Dict[LicenseShape, Callable[[Any, str], str]] = {
    LicenseShape.ABSENT: _from_absent,
    LicenseShape.TEXT: _from_text,
    LicenseShape.OBJECT: _from_object,
    LicenseShape.LIST: _from_list,
    LicenseShape.UNSUPPORTED: _from_unsupported,
}


def normalize_license(raw: Any, path: Union[str, Path] = "<manifest>") -> str:
    return LICENSE_RESOLVERS[classify_license(raw)](raw, str(path))


# --- manifest parsing ---

def _parse_simple(data: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """
    Typed parse: every expected field is a string or absent/null (read as "").
    Returns None as soon as one of them holds anything else.
    """
    fields: Dict[str, str] = {}
    for key in MANIFEST_FIELDS:
        value = data.get(key)
        if value is None:
            fields[key] = ""
        elif isinstance(value, str):
            fields[key] = value
        else:
            return None
    return fields


def _parse_generic(data: Dict[str, Any], path: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for key in TEXT_FIELDS:
        if key not in data:
            raise ManifestSchemaError(path, key, "is missing")
        value = data[key]
        if not isinstance(value, str):
            raise ManifestSchemaError(path, key, f"is {utils.json_type_name(value)}, expected string")
        fields[key] = value
    fields["license"] = normalize_license(data.get("license"), path)
    return fields


def read_manifest_fields(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read one manifest into its five string fields.

    The common case is a flat object of strings. When any of the expected
    fields holds something else (usually an object or array license) the
    text fields are projected strictly and the license is resolved by shape.

    Raises:
        ManifestReadError: the file could not be read
        ManifestSyntaxError: not valid JSON, or not a JSON object
        ManifestSchemaError: required field missing/mistyped, unknown license shape
    """
    path_str = str(path)
    data = utils.read_json_file(path)
    if not isinstance(data, dict):
        raise ManifestSyntaxError(path_str, f"top-level value is {utils.json_type_name(data)}, expected object")

    fields = _parse_simple(data)
    if fields is None:
        logger.debug(f"{path_str}: non-string manifest field, falling back to generic parse")
        fields = _parse_generic(data, path_str)
    return fields


def _build_record(fields: Dict[str, str], path: Union[str, Path]) -> ManifestRecord:
    if not fields["name"]:
        raise ManifestSchemaError(path, "name", "is missing or empty")

    return ManifestRecord(
        name=fields["name"],
        version=fields["version"],
        description=fields["description"],
        homepage=fields["homepage"],
        license=fields["license"],
        absolute_path=str(path),
    )


def parse_manifest(path: Union[str, Path]) -> ManifestRecord:
    """Read one manifest and build its record; an empty name is a ManifestSchemaError."""
    return _build_record(read_manifest_fields(path), path)


def is_allowed(name: str, allow_list: AllowList) -> bool:
    return not allow_list or name in allow_list


def normalize_manifest(path: Union[str, Path], allow_list: AllowList = frozenset()) -> Optional[ManifestRecord]:
    """
    Parse `path` and return its record, or None when the allow-list filters it out.

    With an allow-list, a manifest without a name (e.g. a nested
    {"type": "module"} marker) is filtered like any other unlisted package.
    """
    fields = read_manifest_fields(path)
    if not is_allowed(fields["name"], allow_list):
        logger.debug(f"{fields['name'] or '<unnamed>'} not in allow-list, skipping {path}")
        return None
    return _build_record(fields, path)
