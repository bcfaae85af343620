"""Visitation of a single directory.

The visitor lists one directory, writes a record for each immediate file
and subdirectory, and hands the subdirectories back to the scheduler as
new traversal requests. It never descends into a child itself, so stack
depth does not grow with tree depth.
"""

import logging
import os
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import SinkWriteError
from .counters import Counters
from .records import DirectoryRecord, ExceptionRecord, FileRecord
from .sink import RecordSink

logger = logging.getLogger(__name__)


class DirectoryVisitor:
    """Inventories the immediate contents of one directory at a time.

    Failures are isolated: a directory that cannot be listed produces one
    exception record and nothing else, and a file whose size cannot be
    read produces an exception record in place of its file record.
    Nothing is raised to the caller.
    """

    def __init__(
        self,
        sink: RecordSink,
        counters: Counters,
        submit_children: Optional[Callable[[Sequence[str]], None]] = None,
        follow_symlinks: bool = False,
        on_error: Optional[Callable[[str, Exception], None]] = None,
    ):
        """Initialize visitor.

        Args:
            sink: Destination of all records
            counters: Shared tallies, incremented after each written record
            submit_children: Receives the subdirectory paths of each visited
                directory (the scheduler's admission entry point)
            follow_symlinks: Treat symlinks to directories as directories and
                report the size of a symlinked file's target
            on_error: Optional callback invoked with (context, error) after
                an exception record is produced
        """
        self.sink = sink
        self.counters = counters
        self.submit_children = submit_children
        self.follow_symlinks = follow_symlinks
        self.on_error = on_error

    def visit(self, path: str) -> None:
        """Inventory the immediate contents of ``path``."""
        try:
            files, subdirs = self._list(path)
        except OSError as e:
            self.record_exception(path, e)
            return

        logger.debug("Visiting %s: %d files, %d subdirectories",
                     path, len(files), len(subdirs))

        for entry in files:
            self._record_file(entry)

        for entry in subdirs:
            self._record_directory(entry.path)

        if subdirs and self.submit_children is not None:
            self.submit_children([entry.path for entry in subdirs])

    def record_exception(self, context: str, error: Exception) -> None:
        """Write an exception record for ``context`` and count it."""
        logger.warning("Failure at %s: %s", context, error)
        record = ExceptionRecord.from_error(context, error)
        if self.sink.report_exception(record):
            self.counters.increment_exceptions()
        if self.on_error is not None:
            try:
                self.on_error(context, error)
            except Exception:
                logger.exception("on_error callback failed for %s", context)

    def _list(self, path: str) -> Tuple[List[os.DirEntry], List[os.DirEntry]]:
        # The listing is completed before any record is written, so a
        # directory that fails mid-listing emits nothing but its exception
        files = []
        subdirs = []
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    subdirs.append(entry)
                else:
                    files.append(entry)
        return files, subdirs

    def _record_file(self, entry: os.DirEntry) -> None:
        try:
            size = entry.stat(follow_symlinks=self.follow_symlinks).st_size
        except OSError as e:
            self.record_exception(entry.path, e)
            return
        try:
            self.sink.write_file(FileRecord(entry.path, size))
        except SinkWriteError as e:
            self.record_exception(entry.path, e)
            return
        self.counters.increment_files()

    def _record_directory(self, path: str) -> None:
        try:
            self.sink.write_directory(DirectoryRecord(path))
        except SinkWriteError as e:
            self.record_exception(path, e)
            return
        self.counters.increment_directories()
