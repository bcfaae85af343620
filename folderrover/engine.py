"""The inventory engine: a visitor and a bounded scheduler on a thread pool.

FolderRover wires the core components together. The root directory is
submitted as the first traversal request; every visitation submits its
subdirectories as further requests; the outstanding-work tracker says
when the whole tree is done.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from .config import InventoryConfig
from .core import BoundedScheduler, Counters, DirectoryVisitor, OutstandingWork, RecordSink

logger = logging.getLogger(__name__)


class FolderRover:
    """Runs one concurrent inventory of a directory tree into a RecordSink.

    The sink is owned by the caller: the engine writes to it but never
    closes it. Close it only after ``wait()`` (or ``run()``) reports
    completion.

    Example:
        with RecordSink.open(output_dir) as sink:
            with FolderRover(sink) as rover:
                stats = rover.run("/data")
    """

    def __init__(self, sink: RecordSink, config: Optional[InventoryConfig] = None):
        """Initialize engine.

        Args:
            sink: Already-open destination of all records
            config: Run configuration (defaults to InventoryConfig())

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        self.config = config or InventoryConfig()
        self.config.ensure_valid()
        self.sink = sink
        self.counters = Counters()
        self.work = OutstandingWork()
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="folderrover",
        )
        self.visitor = DirectoryVisitor(
            sink,
            self.counters,
            follow_symlinks=self.config.follow_symlinks,
            on_error=self.config.on_error,
        )
        self.scheduler = BoundedScheduler(
            self._executor,
            self.visitor.visit,
            self.work,
            chunk_size=self.config.chunk_size,
            on_rejected=self.visitor.record_exception,
        )
        self.visitor.submit_children = self.scheduler.submit_children
        self.root: Optional[str] = None
        self._started_at: Optional[float] = None

    def start(self, root: str) -> None:
        """Submit the root directory. The root itself is never recorded.

        Raises:
            RuntimeError: If the engine was already started
        """
        if self.root is not None:
            raise RuntimeError(f"FolderRover already started on {self.root}")
        self.root = os.path.abspath(os.fspath(root))
        self._started_at = time.monotonic()
        logger.info("Starting inventory of %s", self.root)
        self.scheduler.submit(self.root)

    def is_complete(self) -> bool:
        return self.work.is_complete()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no traversal work remains (or until ``timeout``)."""
        return self.work.wait(timeout)

    def progress(self) -> Dict[str, int]:
        """Current counters plus outstanding and running task counts."""
        files, directories, exceptions = self.counters.snapshot()
        return {
            'files': files,
            'directories': directories,
            'exceptions': exceptions,
            'outstanding': self.work.count,
            'running': self.scheduler.running,
        }

    def run(
        self,
        root: str,
        progress_callback: Optional[Callable[[Dict[str, int]], None]] = None,
    ) -> Dict[str, Any]:
        """Inventory ``root`` and block until the whole tree is visited.

        Args:
            root: Directory to inventory
            progress_callback: Called with ``progress()`` every
                ``config.poll_interval`` seconds and once at the end

        Returns:
            Final statistics (see ``get_stats()``)
        """
        self.start(root)
        try:
            while not self.wait(self.config.poll_interval):
                if progress_callback is not None:
                    progress_callback(self.progress())
            if progress_callback is not None:
                progress_callback(self.progress())
        finally:
            self.shutdown()
        stats = self.get_stats()
        logger.info("Inventory of %s complete: %d files, %d directories, %d exceptions",
                    self.root, stats['files'], stats['directories'], stats['exceptions'])
        return stats

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics.

        Returns:
            Statistics dictionary
        """
        stats: Dict[str, Any] = {'root': self.root}
        stats.update(self.progress())
        stats.update({
            'admitted': self.scheduler.admitted,
            'batches': self.scheduler.batches,
            'chunk_size': self.scheduler.chunk_size,
            'elapsed_seconds': (
                time.monotonic() - self._started_at if self._started_at is not None else 0.0
            ),
            'unreported': len(self.sink.unreported),
            'failed_writes': sum(
                stream.failed
                for stream in (self.sink.files, self.sink.directories, self.sink.exceptions)
            ),
        })
        return stats

    def shutdown(self, wait: bool = True) -> None:
        """Shut the worker pool down."""
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def __repr__(self) -> str:
        return f"FolderRover(root={self.root!r}, {self.counters!r}, outstanding={self.work.count})"
