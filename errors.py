from __future__ import annotations

from typing import Iterable


class ManifestReportError(Exception):
    """Base class for every fatal error raised while building a report."""


class ManifestNotFoundError(ManifestReportError):
    """The scan root or the manifest set beneath it does not exist."""


class RootPathError(ManifestNotFoundError):
    pass


class ManifestReadError(ManifestReportError):
    """A manifest (or a directory on the way to one) could not be read."""

    def __init__(self, path, reason) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Read file error: {self.path}: {reason}")


class ManifestSyntaxError(ManifestReportError):
    def __init__(self, path, reason) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid JSON in {self.path}: {reason}")


class ManifestSchemaError(ManifestReportError):
    """
    The manifest is valid JSON but a required field is missing, has the wrong
    type, or the license value has a shape we cannot resolve.
    """

    def __init__(self, path, field: str, reason: str) -> None:
        self.path = str(path)
        self.field = field
        self.reason = reason
        super().__init__(f"Error parsing {self.path}: field '{field}' {reason}")


class MissingDependencyError(ManifestReportError):
    """Allow-listed package names that no discovered manifest declared."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = sorted(names)
        super().__init__(
            f"No manifest found for {len(self.names)} allow-listed package(s): {', '.join(self.names)}"
        )


class GatherTimeoutError(ManifestReportError):
    def __init__(self, timeout: float, pending: int) -> None:
        self.timeout = timeout
        self.pending = pending
        super().__init__(f"Timed out after {timeout}s waiting for {pending} manifest(s)")
