#!/usr/bin/env python3
"""
Report name/version/description/homepage/license for every package.json
found under a node_modules directory.

Usage:
  manifest-report -path ./node_modules
  manifest-report -path ./node_modules -onlyDirectDependencies -output file
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from artifact_generators.report_gen import assemble_report, write_report
from configuration import Configuration as Config
from errors import GatherTimeoutError, ManifestReportError, RootPathError
from loggers.main_logger import close_main_logger, configure_main_logger, main_logger as logger
from models.enums import DependencyScope
from scanners.collection_coordinator import collect_manifests
from scanners.manifest_locator import locate_manifests
from timer import Timer
from tools.allow_list_reader import allow_list_source_path, read_allow_list

# Workers may still be blocked in a read; the process must not wait for them
EXIT_TIMED_OUT = 3


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Collect package.json metadata from a dependency tree into a JSON report.")
    ap.add_argument("-path", "--path", dest="path", default="", help="Path to node_modules directory")
    ap.add_argument(
        "-onlyDirectDependencies", "--only-direct-dependencies",
        dest="only_direct", action="store_true",
        help="Get direct dependencies only (names in ../package.json dependencies)")
    ap.add_argument(
        "-onlyDirectDevDependencies", "--only-direct-dev-dependencies",
        dest="only_dev", action="store_true",
        help="Get direct dev dependencies only (names in ../package.json devDependencies)")
    ap.add_argument(
        "-output", "--output", dest="output", default="",
        help=f"'file' saves to ./{Config.report_file_name}; anything else writes to stdout")
    ap.add_argument("--max-workers", type=_positive_int, default=Config.max_workers, help="Parallel manifest readers")
    ap.add_argument(
        "--timeout", type=float, default=Config.gather_timeout_seconds,
        help="Give up if collection takes longer than this many seconds")
    ap.add_argument("--log-level", default=Config.log_level, help="DEBUG, INFO, WARNING or ERROR")
    ap.add_argument("--log-file", default=Config.log_file, help="Also write diagnostics to this file")
    return ap


def validate_root(path: str) -> Path:
    if not path:
        raise RootPathError("Directory path is invalid")
    root = Path(os.path.abspath(path))
    if not root.exists():
        raise RootPathError(f"Failed to find path: {root}")
    if not root.is_dir():
        raise RootPathError(f"Not a directory: {root}")
    return root


def selected_scopes(args: argparse.Namespace) -> List[DependencyScope]:
    scopes: List[DependencyScope] = []
    if args.only_direct:
        scopes.append(DependencyScope.DIRECT)
    if args.only_dev:
        scopes.append(DependencyScope.DEV)
    return scopes


def generate_report(
    root: Path,
    scopes: Sequence[DependencyScope] = (),
    *,
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> bytes:
    allow_list = read_allow_list(root, scopes)
    exclude = [allow_list_source_path(root)] if scopes else []
    paths = locate_manifests(root, exclude=exclude)
    records = collect_manifests(paths, allow_list, max_workers=max_workers, timeout=timeout)
    return assemble_report(records)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_main_logger(args.log_level.upper(), args.log_file)

    scan_timer = Timer()
    try:
        root = validate_root(args.path)
        scan_timer.start(f"Scanning {root} for {Config.manifest_file_name} files")
        report = generate_report(
            root,
            selected_scopes(args),
            max_workers=args.max_workers,
            timeout=args.timeout,
        )
        scan_timer.stop(f"Assembled {len(report)} byte report for {root}")
    except GatherTimeoutError as e:
        logger.error(str(e))
        return EXIT_TIMED_OUT
    except ManifestReportError as e:
        logger.error(str(e))
        return 1

    try:
        write_report(report, args.output)
    except OSError as e:
        logger.error(f"Failed to write report: {e}")
        return 1
    logger.info(scan_timer.elapsed("Elapsed time for scan:"))
    return 0


def run() -> None:
    code = main()
    if code == EXIT_TIMED_OUT:
        # SystemExit would join the stuck worker threads and hang
        close_main_logger()
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(code)
    raise SystemExit(code)


if __name__ == "__main__":
    run()
