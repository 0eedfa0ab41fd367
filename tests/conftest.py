"""Shared fixtures for manifest-report tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from loggers.main_logger import main_logger


@pytest.fixture(autouse=True)
def reset_main_logger():
    """Detach handlers the CLI attached so they don't outlive the captured streams."""
    yield
    for handler in list(main_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            main_logger.removeHandler(handler)
            handler.close()
    main_logger.setLevel(logging.NOTSET)


@pytest.fixture
def node_modules(tmp_path: Path) -> Path:
    """An empty node_modules directory inside a project directory."""
    root = tmp_path / "project" / "node_modules"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def write_manifest() -> Callable[..., Path]:
    """Write a package.json into `directory` (created if needed) and return its path."""

    def _write(directory: Path, data: Any = None, *, raw: str = None, **fields: Any) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "package.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
            return path
        if data is None:
            data = {
                "name": directory.name,
                "version": "1.0.0",
                "description": f"{directory.name} package",
                "homepage": f"https://example.com/{directory.name}",
                "license": "MIT",
            }
        data.update(fields)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
