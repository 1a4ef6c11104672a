"""Worker threads: pop an entry, classify it, merge it into the store"""

import logging
import os
import stat as statmod
import threading

from dirstat.aggregate import AggregateStore
from dirstat.errors import EntryAccessError
from dirstat.models import NO_EXTENSION, FileObservation
from dirstat.work_queue import END_OF_WORK, WorkQueue


logger = logging.getLogger(__name__)


def normalize_extension(name: str) -> str:
    """Lowercased final suffix of a file name, or '(no ext)'.

    Only the last dot counts: 'archive.TAR.GZ' -> '.gz'. Names that only
    start with a dot ('.bashrc') have no extension.
    """
    ext = os.path.splitext(os.path.basename(name))[1]
    if not ext:
        return NO_EXTENSION
    return ext.lower()


def classify_entry(entry: os.DirEntry | str) -> FileObservation | None:
    """Turn a queued entry into an observation.

    Args:
        entry: os.DirEntry from the scanner, or a plain path

    Returns:
        FileObservation for regular files (symlinks are followed), None for
        directories and special files

    Raises:
        EntryAccessError: If the entry can no longer be stat-ed (deleted,
            permission revoked, broken symlink)
    """
    if isinstance(entry, os.DirEntry):
        path = entry.path
        name = entry.name
    else:
        path = os.fspath(entry)
        name = os.path.basename(path)

    try:
        st = entry.stat(follow_symlinks=True) if isinstance(entry, os.DirEntry) else os.stat(path)
    except OSError as e:
        raise EntryAccessError(path, e.strerror or str(e)) from e

    if not statmod.S_ISREG(st.st_mode):
        return None

    return FileObservation(
        path=os.path.abspath(path),
        size=st.st_size,
        extension=normalize_extension(name),
    )


class Worker(threading.Thread):
    """Consumer thread draining a WorkQueue into an AggregateStore.

    The queue lock and the store lock are taken in two separate critical
    sections, so a worker never holds both at once.
    """

    def __init__(self, queue: WorkQueue, store: AggregateStore, name: str | None = None):
        super().__init__(name=name, daemon=True)
        self.queue = queue
        self.store = store
        self.processed = 0

    def run(self):
        while True:
            entry = self.queue.pop()
            if entry is END_OF_WORK:
                break
            self.processed += 1
            self.process(entry)
        logger.debug(f'{self.name} finished after {self.processed} entries')

    def process(self, entry) -> None:
        """Classify one entry and merge it, absorbing per-entry failures."""
        try:
            observation = classify_entry(entry)
        except EntryAccessError as e:
            self.store.record_skip(e.path, e.reason)
            return
        if observation is not None:
            self.store.merge(observation)
