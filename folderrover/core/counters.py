"""Shared tallies of files, directories and exceptions seen.

Python has no atomic integers, so all three counters sit behind a single
lock. Every worker increments through this object; progress reporters
read a consistent snapshot.
"""

import threading
from typing import NamedTuple


class CounterSnapshot(NamedTuple):
    """Point-in-time copy of the counters."""

    files: int
    directories: int
    exceptions: int


class Counters:
    """Monotonically increasing, thread-safe inventory counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self._files = 0
        self._directories = 0
        self._exceptions = 0

    @property
    def files(self) -> int:
        with self._lock:
            return self._files

    @property
    def directories(self) -> int:
        with self._lock:
            return self._directories

    @property
    def exceptions(self) -> int:
        with self._lock:
            return self._exceptions

    def increment_files(self, amount: int = 1) -> int:
        """Add ``amount`` to the file counter and return the new value."""
        with self._lock:
            self._files += amount
            return self._files

    def increment_directories(self, amount: int = 1) -> int:
        """Add ``amount`` to the directory counter and return the new value."""
        with self._lock:
            self._directories += amount
            return self._directories

    def increment_exceptions(self, amount: int = 1) -> int:
        """Add ``amount`` to the exception counter and return the new value."""
        with self._lock:
            self._exceptions += amount
            return self._exceptions

    def snapshot(self) -> CounterSnapshot:
        """Read all three counters under one lock acquisition."""
        with self._lock:
            return CounterSnapshot(self._files, self._directories, self._exceptions)

    def __repr__(self) -> str:
        files, directories, exceptions = self.snapshot()
        return f"Counters(files={files}, directories={directories}, exceptions={exceptions})"
