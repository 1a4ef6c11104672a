"""Producer side: depth-first walk that feeds the work queue"""

import logging
import os

from dirstat.errors import QueueClosedError, TraversalError
from dirstat.work_queue import WorkQueue


logger = logging.getLogger(__name__)


class Scanner:
    """Walks a directory tree and pushes every entry onto a WorkQueue.

    Files, directories and symlinks are all pushed; workers decide what is a
    regular file. Symlinks to directories are descended into, and cycles are
    not detected. The queue is closed when run() returns, whether the walk
    completed or not.
    """

    def __init__(self, root: str, queue: WorkQueue):
        self.root = os.path.abspath(root)
        self.queue = queue
        self.entries_pushed = 0
        self.directories_skipped = 0
        self.error: str | None = None

    def run(self) -> None:
        """Walk the tree, then close the queue.

        Any failure of the walk itself is kept on ``self.error`` so the
        orchestrator still gets a best-effort result. QueueClosedError is a
        caller bug and propagates.
        """
        try:
            self._walk()
        except TraversalError as e:
            self.error = str(e)
            logger.warning(f'Traversal aborted: {e}')
        except QueueClosedError:
            raise
        except Exception as e:
            self.error = f'{type(e).__name__}: {e}'
            logger.exception(f'Traversal aborted unexpectedly under {self.root}')
        finally:
            self.queue.close()
        logger.debug(
            f'Scanner done: {self.entries_pushed} entries pushed, '
            f'{self.directories_skipped} directories skipped'
        )

    def _walk(self) -> None:
        """Depth-first walk with an explicit stack of open directory iterators.

        Each entry is pushed before its children are listed.
        """
        try:
            root_it = os.scandir(self.root)
        except OSError as e:
            raise TraversalError(f'cannot read root {self.root}: {e.strerror or e}') from e

        stack = [(root_it, self.root)]
        try:
            while stack:
                it, path = stack[-1]
                try:
                    entry = next(it)
                except StopIteration:
                    it.close()
                    stack.pop()
                    continue
                except OSError as e:
                    if path == self.root:
                        raise TraversalError(f'error reading root {path}: {e.strerror or e}') from e
                    self.directories_skipped += 1
                    logger.info(f'Error reading {path}, skipping rest of directory: {e.strerror or e}')
                    it.close()
                    stack.pop()
                    continue

                self._push(entry)
                if self._is_dir(entry):
                    child_it = self._open_dir(entry.path)
                    if child_it is not None:
                        stack.append((child_it, entry.path))
        finally:
            for it, _ in stack:
                it.close()

    def _open_dir(self, path: str):
        try:
            return os.scandir(path)
        except PermissionError as e:
            self.directories_skipped += 1
            logger.info(f'Permission denied, skipping {path}: {e.strerror}')
        except OSError as e:
            # Vanished or unreadable subdirectory: skip the subtree only
            self.directories_skipped += 1
            logger.info(f'Cannot read {path}, skipping: {e.strerror or e}')
        return None

    def _push(self, entry: os.DirEntry) -> None:
        try:
            self.queue.push(entry)
        except QueueClosedError:
            logger.error(f'Work queue closed while scanning {entry.path}')
            raise
        self.entries_pushed += 1

    @staticmethod
    def _is_dir(entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=True)
        except OSError:
            return False
