from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from configuration import Configuration as Config
from errors import ManifestNotFoundError, ManifestReadError
from loggers.scan_logger import scan_logger as logger


def _walk_error_handler(root: str):
    def _raise(err: OSError) -> None:
        if isinstance(err, FileNotFoundError) and err.filename == root:
            raise ManifestNotFoundError(f"Failed to find path: {root}") from err
        raise ManifestReadError(err.filename or root, err.strerror or err) from err

    return _raise


def locate_manifests(
    root: Union[str, Path],
    *,
    manifest_file_name: Optional[str] = None,
    exclude: Iterable[Union[str, Path]] = (),
) -> List[Path]:
    """
    Recursively collect every manifest file beneath `root`.

    A manifest sitting directly inside `root` counts like any other; callers
    that read a manifest separately (the allow-list source) pass it in
    `exclude`. Symlinked directories are not followed.

    Raises:
        ManifestNotFoundError: root is missing or holds no manifest at all
        ManifestReadError: a directory could not be listed during the walk
    """
    file_name = manifest_file_name or Config.manifest_file_name
    excluded = {os.path.abspath(e) for e in exclude}
    root_str = str(root)

    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_str, onerror=_walk_error_handler(root_str)):
        dirnames.sort()
        if file_name in filenames:
            path = Path(dirpath, file_name)
            if os.path.abspath(path) in excluded:
                logger.debug(f"Skipping excluded manifest {path}")
                continue
            found.append(path)

    if not found:
        raise ManifestNotFoundError(
            f"Failed to find any {file_name} under {root_str}. Check your node_modules path."
        )

    logger.info(f"Found {len(found)} {file_name} file(s) under {root_str}")
    return found
