"""Blocking FIFO shared by the scanner (producer) and the workers (consumers).

A single lock guards both the pending entries and the ``closed`` flag, and
consumers block on a condition variable bound to that same lock. Once
closed, nothing more is pushed, but entries already queued are still handed
out before END_OF_WORK.
"""

import logging
import threading
from collections import deque
from typing import Any

from dirstat.errors import QueueClosedError


logger = logging.getLogger(__name__)


class _EndOfWork:
    """Sentinel type returned by WorkQueue.pop() once the queue is drained."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'END_OF_WORK'

    def __bool__(self):
        return False


END_OF_WORK = _EndOfWork()


class WorkQueue:
    """Unbounded FIFO of filesystem entries with a close flag."""

    def __init__(self):
        self._entries: deque[Any] = deque()
        self._closed = False
        self._cond = threading.Condition(threading.Lock())

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._entries)

    def push(self, entry: Any) -> None:
        """Append an entry and wake one waiting consumer.

        Raises:
            QueueClosedError: If close() was already called
        """
        with self._cond:
            if self._closed:
                raise QueueClosedError('push() after close()')
            self._entries.append(entry)
            self._cond.notify()

    def close(self) -> None:
        """Mark that no more entries will be pushed and wake every consumer.

        Safe to call more than once.
        """
        with self._cond:
            if self._closed:
                return
            self._closed = True
            pending = len(self._entries)
            self._cond.notify_all()
        logger.debug(f'Work queue closed with {pending} entries pending')

    def pop(self) -> Any:
        """Take the next entry, blocking while the queue is empty and open.

        Returns:
            The oldest pending entry, or END_OF_WORK when the queue is both
            empty and closed
        """
        with self._cond:
            while not self._entries and not self._closed:
                self._cond.wait()
            if self._entries:
                return self._entries.popleft()
            return END_OF_WORK
