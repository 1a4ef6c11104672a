"""Shared running totals merged into by the worker threads"""

import logging
import threading

from dirstat.models import FileObservation, ScanSnapshot


logger = logging.getLogger(__name__)


class AggregateStore:
    """Counters for one scan run, guarded by a single lock.

    merge() is the only mutator of the file counters. snapshot() is meant to
    be taken once every worker has been joined; it locks anyway so the copy
    is never torn.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._file_count = 0
        self._total_bytes = 0
        self._extension_bytes: dict[str, int] = {}
        self._extension_counts: dict[str, int] = {}
        self._observations: list[tuple[int, str]] = []
        self._skipped = 0

    def merge(self, observation: FileObservation) -> None:
        """Fold one observation into the totals."""
        ext = observation.extension
        with self._lock:
            self._file_count += 1
            self._total_bytes += observation.size
            self._extension_bytes[ext] = self._extension_bytes.get(ext, 0) + observation.size
            self._extension_counts[ext] = self._extension_counts.get(ext, 0) + 1
            self._observations.append((observation.size, observation.path))

    def record_skip(self, path: str, reason: str) -> None:
        """Count an entry that was dropped because it could not be read."""
        with self._lock:
            self._skipped += 1
        logger.debug(f'Skipped {path}: {reason}')

    @property
    def file_count(self) -> int:
        with self._lock:
            return self._file_count

    def snapshot(
        self,
        root: str,
        workers: int = 0,
        elapsed_seconds: float = 0.0,
        traversal_error: str | None = None,
    ) -> ScanSnapshot:
        """Copy every counter into an immutable-by-convention ScanSnapshot.

        Args:
            root: Scanned root directory
            workers: Worker pool size used for the run
            elapsed_seconds: Wall time of the run
            traversal_error: Message if the walk stopped early

        Returns:
            ScanSnapshot with independent copies of all mappings and lists
        """
        with self._lock:
            return ScanSnapshot(
                root=root,
                file_count=self._file_count,
                total_bytes=self._total_bytes,
                extension_bytes=dict(self._extension_bytes),
                extension_counts=dict(self._extension_counts),
                observations=list(self._observations),
                skipped_entries=self._skipped,
                traversal_error=traversal_error,
                workers=workers,
                elapsed_seconds=elapsed_seconds,
            )
