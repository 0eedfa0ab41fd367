from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from configuration import Configuration as Config
from errors import GatherTimeoutError, MissingDependencyError
from loggers.scan_logger import scan_logger as logger
from models.manifest import AllowList, ManifestRecord, ManifestStore
from scanners.manifest_normalizer import normalize_manifest


def expected_record_count(paths: List[Path], allow_list: AllowList) -> int:
    # One record per allow-listed name, otherwise one per manifest
    return len(allow_list) if allow_list else len(paths)


def _normalize_into(store: ManifestStore, path: Path, allow_list: AllowList) -> Optional[ManifestRecord]:
    record = normalize_manifest(path, allow_list)
    if record is not None:
        store.add(record)
    return record


def collect_manifests(
    paths: Iterable[Union[str, Path]],
    allow_list: AllowList = frozenset(),
    *,
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
    store: Optional[ManifestStore] = None,
) -> List[ManifestRecord]:
    """
    Normalize every manifest concurrently and gather the emitted records.

    Every path is submitted to the pool before any result is read. Completion
    is tracked per task, so the gather ends when all tasks have finished
    (or on the first failure) regardless of how many records were emitted.

    Tips:
      - max_workers bounds open files; defaults to Config.max_workers.
      - timeout bounds the whole gather in seconds; None waits for all tasks.

    Raises:
        ManifestReadError / ManifestSyntaxError / ManifestSchemaError: first failing manifest
        GatherTimeoutError: tasks still running when the timeout expired
        MissingDependencyError: allow-listed names with no matching manifest
    """
    path_list = [Path(p) for p in paths]
    workers = max_workers or Config.max_workers
    if timeout is None:
        timeout = Config.gather_timeout_seconds
    store = store if store is not None else ManifestStore()

    expected = expected_record_count(path_list, allow_list)
    logger.info(f"Collecting {len(path_list)} manifest(s) on {workers} worker(s), expecting {expected} record(s)")

    ex = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="manifest")
    fut_map: Dict[Future, Path] = {}
    try:
        fut_map = {ex.submit(_normalize_into, store, path, allow_list): path for path in path_list}
        for fut in as_completed(fut_map, timeout=timeout):
            # raises the worker's exception, which aborts the whole collection
            fut.result()
    except FuturesTimeoutError:
        pending = sum(1 for f in fut_map if not f.done())
        ex.shutdown(wait=False, cancel_futures=True)
        raise GatherTimeoutError(timeout, pending) from None
    except BaseException:
        ex.shutdown(wait=False, cancel_futures=True)
        raise
    ex.shutdown(wait=True)

    if allow_list:
        missing = allow_list - store.names()
        if missing:
            raise MissingDependencyError(missing)

    collected = len(store)
    if collected != expected:
        logger.warning(f"Expected {expected} record(s) but collected {collected}; duplicate manifests share a name")

    logger.info(f"Collected {collected} record(s)")
    return store.get_all()
