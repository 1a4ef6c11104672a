"""Exception hierarchy for dirstat"""


class DirstatError(Exception):
    """Base class for all dirstat errors."""


class FatalConfigError(DirstatError):
    """Scan cannot start: bad root path or worker count.

    Raised before any thread is started.
    """


class TraversalError(DirstatError):
    """The directory walk cannot continue (e.g. root removed mid-scan)."""


class EntryAccessError(DirstatError):
    """A single entry could not be stat-ed by a worker."""

    def __init__(self, path: str, reason: str):
        super().__init__(f'{path}: {reason}')
        self.path = path
        self.reason = reason


class QueueClosedError(DirstatError):
    """push() was called on a work queue that is already closed."""
