"""Bounded admission of traversal requests onto a worker pool.

A visitation hands its child directories over in consecutive batches of
at most ``chunk_size`` paths, so one directory with thousands of
children does not enqueue them all in a single burst. The batch size
smooths admission per parent; the total number of concurrently running
visitations is bounded by the pool itself.
"""

import logging
import threading
from concurrent.futures import Executor
from typing import Callable, List, Optional, Sequence

from ..config import DEFAULT_CHUNK_SIZE
from .completion import OutstandingWork

logger = logging.getLogger(__name__)


class BoundedScheduler:
    """Turns traversal requests (directory paths) into pool tasks."""

    def __init__(
        self,
        executor: Executor,
        visit: Callable[[str], None],
        work: OutstandingWork,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_rejected: Optional[Callable[[str, Exception], None]] = None,
    ):
        """Initialize scheduler.

        Args:
            executor: Worker pool the visitations run on
            visit: Callable that visits one directory path
            work: Outstanding-work tracker shared with the caller
            chunk_size: Maximum number of requests admitted per batch
            on_rejected: Called with (path, error) when a request cannot be
                admitted or its visitation fails unexpectedly
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self._executor = executor
        self._visit = visit
        self._work = work
        self._on_rejected = on_rejected
        self._lock = threading.Lock()
        self._running = 0
        self._admitted = 0
        self._batches = 0

    @property
    def running(self) -> int:
        """Visitations currently executing on a worker."""
        with self._lock:
            return self._running

    @property
    def admitted(self) -> int:
        """Total requests handed to the pool so far."""
        with self._lock:
            return self._admitted

    @property
    def batches(self) -> int:
        """Total admission batches submitted so far."""
        with self._lock:
            return self._batches

    def submit(self, path: str) -> None:
        """Admit a single request (used for the root directory)."""
        self._admit([path])

    def submit_children(self, paths: Sequence[str]) -> None:
        """Admit child directories in batches of at most ``chunk_size``."""
        for offset in range(0, len(paths), self.chunk_size):
            self._admit(paths[offset:offset + self.chunk_size])

    def _admit(self, batch: List[str]) -> None:
        # Count the whole batch first so the outstanding total never dips
        # while the batch is being handed over
        self._work.add(len(batch))
        with self._lock:
            self._batches += 1
        for path in batch:
            try:
                self._executor.submit(self._run, path)
            except RuntimeError as e:
                logger.warning("Worker pool rejected %s: %s", path, e)
                self._reject(path, e)
                self._work.done()
            else:
                with self._lock:
                    self._admitted += 1

    def _run(self, path: str) -> None:
        with self._lock:
            self._running += 1
        try:
            self._visit(path)
        except Exception as e:
            logger.exception("Unexpected failure visiting %s", path)
            self._reject(path, e)
        finally:
            with self._lock:
                self._running -= 1
            self._work.done()

    def _reject(self, path: str, error: Exception) -> None:
        if self._on_rejected is None:
            logger.error("Dropped traversal request for %s: %s", path, error)
            return
        self._on_rejected(path, error)
