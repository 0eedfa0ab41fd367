from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

AllowList = FrozenSet[str]


@dataclass(frozen=True)
class ManifestRecord:
    name: str
    version: str
    description: str
    homepage: str
    license: str
    absolute_path: str

    def to_json_dict(self) -> Dict[str, str]:
        # key order is part of the report format
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "homepage": self.homepage,
            "license": self.license,
            "absolutePath": self.absolute_path,
        }


def make_allow_list(names: Optional[Iterable[str]] = None) -> AllowList:
    if not names:
        return frozenset()
    return frozenset(names)


class ManifestStore:
    """
    Gather point for records produced by concurrent normalization workers.

    Records are kept in arrival order. A manifest path may only be added
    once; the same package name may appear many times (nested copies).

    Thread-safe for concurrent writers.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._records: List[ManifestRecord] = []
        self._names: Set[str] = set()
        self._paths: Set[str] = set()

    def add(self, record: ManifestRecord) -> None:
        with self._lock:
            if record.absolute_path in self._paths:
                raise ValueError(f"Manifest already collected: {record.absolute_path}")
            self._records.append(record)
            self._names.add(record.name)
            self._paths.add(record.absolute_path)

    def names(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._names)

    def get_all(self) -> List[ManifestRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
