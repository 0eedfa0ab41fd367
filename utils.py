import json
import os
from pathlib import Path
from typing import Any, Optional, Union

from errors import ManifestReadError, ManifestSyntaxError

p = Path(__file__).resolve()


def load_env_file(filepath=Path(".env").resolve()):
    """
    Load KEY=VALUE lines into os.environ.

    Blank lines and '#' comments are ignored. Variables already present in the
    environment are left alone. A missing file is not an error.
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key:
                    os.environ.setdefault(key, value)
    except FileNotFoundError:
        pass


def read_int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def read_float_env(name: str, default: Optional[float] = None) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def read_json_file(json_path: Union[str, Path]) -> Any:
    """
    Read a file as bytes and parse it as JSON.

    Raises:
        ManifestReadError: if the file cannot be read
        ManifestSyntaxError: if the content is not valid JSON
    """
    path = Path(json_path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ManifestReadError(json_path, e.strerror or e) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestSyntaxError(json_path, f"line {e.lineno}, col {e.colno}: {e.msg}") from e
    except UnicodeDecodeError as e:
        raise ManifestSyntaxError(json_path, f"not valid UTF-8: {e.reason}") from e


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value by its JSON type, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
