"""Global completion detection for a traversal.

An explicit outstanding-work count replaces sampling the pool for idle
workers. Every admission adds to the count before the task is handed to
the pool and every task removes itself when it finishes, whatever the
outcome. A parent admits all of its children before it removes itself,
so the count only returns to zero once no directory is queued, running
or listed-but-not-yet-admitted.
"""

import threading
from typing import Optional


class OutstandingWork:
    """Counter of traversal requests submitted but not yet completed."""

    def __init__(self):
        self._condition = threading.Condition()
        self._count = 0
        self._started = False

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    @property
    def started(self) -> bool:
        """True once the first request (the root) has been admitted."""
        with self._condition:
            return self._started

    def add(self, n: int = 1) -> None:
        """Account for ``n`` requests about to be admitted."""
        if n < 0:
            raise ValueError("n must be non-negative")
        with self._condition:
            self._count += n
            self._started = True

    def done(self, n: int = 1) -> None:
        """Account for ``n`` requests that finished (or were rejected).

        Raises:
            RuntimeError: If more requests finish than were added
        """
        with self._condition:
            if n > self._count:
                raise RuntimeError(
                    f"Outstanding work underflow: done({n}) with count {self._count}"
                )
            self._count -= n
            if self._count == 0:
                self._condition.notify_all()

    def is_complete(self) -> bool:
        with self._condition:
            return self._started and self._count == 0

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until complete or until ``timeout`` seconds elapse.

        Returns:
            True if the traversal is complete
        """
        with self._condition:
            return self._condition.wait_for(
                lambda: self._started and self._count == 0, timeout=timeout
            )

    def __repr__(self) -> str:
        return f"OutstandingWork(count={self.count}, started={self.started})"
