"""Scan orchestration: worker pool lifecycle around a single scanner.

State machine:

    IDLE -> SCANNING -> DRAINING -> DONE

- IDLE -> SCANNING: root validated, queue and store created, workers started,
  scanner begins walking on the calling thread.
- SCANNING -> DRAINING: scanner returned and closed the queue (success or
  traversal error).
- DRAINING -> DONE: every worker joined, snapshot taken.
"""

import logging
import os
from enum import Enum
from time import time

from dirstat.aggregate import AggregateStore
from dirstat.errors import FatalConfigError
from dirstat.models import ScanSnapshot
from dirstat.scanner import Scanner
from dirstat.utils import default_worker_count
from dirstat.work_queue import WorkQueue
from dirstat.worker import Worker


logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    """Orchestrator lifecycle states."""

    IDLE = 'idle'
    SCANNING = 'scanning'
    DRAINING = 'draining'
    DONE = 'done'


def validate_root(root: str) -> str:
    """Return the absolute root path, or fail fast.

    Raises:
        FatalConfigError: If the path does not exist or is not a directory
    """
    if not root:
        raise FatalConfigError('Root path is empty')
    path = os.path.abspath(root)
    if not os.path.exists(path):
        raise FatalConfigError(f'Path does not exist: {root}')
    if not os.path.isdir(path):
        raise FatalConfigError(f'Not a directory: {root}')
    return path


def resolve_worker_count(requested: int | None) -> int:
    """Pick the worker pool size.

    Args:
        requested: Explicit pool size, or None for the configured default
            (DIRSTAT_WORKERS or max(2, logical CPUs))

    Raises:
        FatalConfigError: If an explicit size below 1 is requested
    """
    if requested is None:
        return default_worker_count()
    if requested < 1:
        raise FatalConfigError(f'Worker count must be at least 1, got {requested}')
    return requested


class ScanOrchestrator:
    """Runs one scan: starts the workers, walks the tree, joins, snapshots."""

    def __init__(self, root: str, workers: int | None = None):
        self.root = root
        self.requested_workers = workers
        self.state = ScanState.IDLE
        self.queue: WorkQueue | None = None
        self.store: AggregateStore | None = None
        self.scanner: Scanner | None = None
        self.workers: list[Worker] = []

    def _transition(self, new_state: ScanState) -> None:
        logger.debug(f'[SCAN] {self.state.value} -> {new_state.value}')
        self.state = new_state

    def run(self) -> ScanSnapshot:
        """Execute the scan and return the final snapshot.

        Raises:
            FatalConfigError: Before any thread starts, on a bad root or
                worker count
            RuntimeError: If run() is called twice
        """
        if self.state is not ScanState.IDLE:
            raise RuntimeError(f'Scan already {self.state.value}')

        root = validate_root(self.root)
        worker_count = resolve_worker_count(self.requested_workers)
        start_time = time()

        self.queue = WorkQueue()
        self.store = AggregateStore()
        self.scanner = Scanner(root, self.queue)
        self.workers = [Worker(self.queue, self.store, name=f'dirstat-worker-{i}') for i in range(worker_count)]

        logger.info(f'[SCAN] Scanning {root} with {worker_count} workers')
        self._transition(ScanState.SCANNING)
        for worker in self.workers:
            worker.start()

        try:
            self.scanner.run()
        finally:
            # Closed even if the scanner raised, or workers never drain
            self.queue.close()
            self._transition(ScanState.DRAINING)
            for worker in self.workers:
                worker.join()

        elapsed = time() - start_time
        snapshot = self.store.snapshot(
            root=root,
            workers=worker_count,
            elapsed_seconds=elapsed,
            traversal_error=self.scanner.error,
        )
        self._transition(ScanState.DONE)
        logger.info(
            f'[SCAN] Completed {root}: {snapshot.file_count} files, '
            f'{snapshot.total_bytes:,} bytes, {snapshot.skipped_entries} skipped in {elapsed:.2f}s'
        )
        return snapshot


def scan_directory(root: str, workers: int | None = None) -> ScanSnapshot:
    """Scan ``root`` with a fresh orchestrator and return the snapshot."""
    return ScanOrchestrator(root, workers=workers).run()
