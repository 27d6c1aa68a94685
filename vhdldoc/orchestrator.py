"""Concurrent catalog build.

:func:`scan_files` scans every file in its own worker thread.  Workers
share nothing: each returns the :class:`vhdldoc.scanner.FileScan` of
its file, and once all of them have finished the results are merged on
the calling thread, in input order.  A failing file only loses its own
symbols; the build as a whole is then reported as failed.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DocConfig
from .errors import ScanError, ScanTaskError
from .library import LibraryContainer
from .scanner import FileScan, scan_file

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    """Outcome of a catalog build.

    Attributes:
        libraries: Symbols of every successfully scanned file.
        failures: Error of every file whose scan was abandoned.
    """

    libraries: LibraryContainer = field(default_factory=LibraryContainer)
    failures: Dict[str, ScanError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def _scan_one(path: str, library: str) -> FileScan:
    logger.debug("scanning %s into library '%s'", path, library)
    try:
        return scan_file(path, library)
    except ScanError:
        raise
    except Exception as exc:
        # Any other failure still only costs this file.
        raise ScanTaskError(f"unexpected {type(exc).__name__}: {exc}", path) from exc


def scan_files(files: Sequence[str], config: Optional[DocConfig] = None) -> ScanReport:
    """Scan ``files`` concurrently and build the library catalog.

    Args:
        files: Paths of the VHDL sources.  Which files to pass, and the
            library of each, are decided by the caller.
        config: Library assignment and worker count.  Defaults to
            :class:`DocConfig` defaults.

    Returns:
        A :class:`ScanReport`.  Errors are collected, never raised.
    """
    config = config or DocConfig()
    report = ScanReport()
    if not files:
        return report

    workers = config.workers or len(files)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vhdldoc-scan") as pool:
        futures: List[Tuple[str, Future]] = [
            (path, pool.submit(_scan_one, path, config.library_for(path))) for path in files
        ]
        wait([future for _, future in futures])

    # Every task is done; merge single-threaded in input order.
    for path, future in futures:
        try:
            report.libraries.merge(future.result())
        except ScanError as exc:
            logger.error("%s", exc)
            report.failures[path] = exc

    logger.debug("scanned %d file(s), %d failed", len(files), len(report.failures))
    return report


def scan_files_sequential(files: Sequence[str], config: Optional[DocConfig] = None) -> ScanReport:
    """Scan ``files`` one after another on the calling thread."""
    config = config or DocConfig()
    report = ScanReport()
    for path in files:
        try:
            report.libraries.merge(_scan_one(path, config.library_for(path)))
        except ScanError as exc:
            logger.error("%s", exc)
            report.failures[path] = exc
    return report
