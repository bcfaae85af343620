"""Thread-safe append-only writers for the three inventory streams.

Each stream owns its handle and a lock; a record is written and flushed
while the lock is held, so concurrent writers never interleave partial
lines and a crash leaves every completed record on disk. The three
streams are independent: a failing stream does not block the others.
"""

import logging
import os
import threading
from typing import Any, List, Optional, TextIO

from ..config import InventoryConfig
from ..errors import OutputInitError, SinkWriteError
from .records import DirectoryRecord, ExceptionRecord, FileRecord

logger = logging.getLogger(__name__)


class RecordStream:
    """One append-only output stream guarded by its own lock."""

    def __init__(self, handle: TextIO, name: str):
        """Initialize the stream.

        Args:
            handle: Open text handle the records are written to
            name: Stream name used in error messages ('files', ...)
        """
        self.name = name
        self._handle = handle
        self._lock = threading.Lock()
        self._closed = False
        self.written = 0
        self.failed = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, record: Any) -> None:
        """Write one record as a single newline-terminated line and flush.

        A line whose flush fails may still sit in the handle's buffer and
        reach the file on a later flush or on close; it is counted in
        ``failed``, never in ``written``.

        Raises:
            SinkWriteError: If the handle rejects the write or flush
        """
        line = record.to_line() + "\n"
        with self._lock:
            try:
                self._handle.write(line)
                self._handle.flush()
            except (OSError, ValueError) as e:
                self.failed += 1
                raise SinkWriteError(self.name, record, e) from e
            self.written += 1

    def close(self) -> None:
        """Flush then close the handle. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._handle.flush()
            finally:
                self._handle.close()

    def __repr__(self) -> str:
        return f"RecordStream({self.name!r}, written={self.written}, failed={self.failed})"


class RecordSink:
    """The three inventory streams: files, directories and exceptions."""

    def __init__(self, files: TextIO, directories: TextIO, exceptions: TextIO):
        """Wrap three already-open text handles.

        Args:
            files: Destination of FileRecords
            directories: Destination of DirectoryRecords
            exceptions: Destination of ExceptionRecords
        """
        self.files = RecordStream(files, "files")
        self.directories = RecordStream(directories, "directories")
        self.exceptions = RecordStream(exceptions, "exceptions")
        # Exception records that could not be written anywhere
        self.unreported: List[ExceptionRecord] = []
        self._unreported_lock = threading.Lock()

    @classmethod
    def open(cls, output_dir: str, config: Optional[InventoryConfig] = None) -> 'RecordSink':
        """Create (truncating) the three output files inside ``output_dir``.

        Raises:
            OutputInitError: If any of the files cannot be created. Handles
                opened before the failure are closed again.
        """
        config = config or InventoryConfig()
        names = [config.files_name, config.directories_name, config.exceptions_name]
        handles = []
        try:
            for name in names:
                path = os.path.join(output_dir, name)
                try:
                    handles.append(open(path, "w", encoding=config.encoding,
                                        errors=config.errors, newline="\n"))
                except OSError as e:
                    raise OutputInitError(path, e) from e
        except OutputInitError:
            for handle in handles:
                handle.close()
            raise
        logger.debug("Opened inventory outputs in %s", output_dir)
        return cls(*handles)

    def write_file(self, record: FileRecord) -> None:
        self.files.write(record)

    def write_directory(self, record: DirectoryRecord) -> None:
        self.directories.write(record)

    def write_exception(self, record: ExceptionRecord) -> None:
        self.exceptions.write(record)

    def report_exception(self, record: ExceptionRecord) -> bool:
        """Write an exception record, surfacing it on the console if that fails.

        A failing exception stream is not retried; the record is logged at
        ERROR level and kept in ``unreported`` for the caller.

        Returns:
            True if the record reached the exception stream
        """
        try:
            self.write_exception(record)
            return True
        except SinkWriteError as e:
            logger.error("Failed to write to exception file: %s (record: %s)",
                         e.cause, record.to_line())
            with self._unreported_lock:
                self.unreported.append(record)
            return False

    def close(self) -> None:
        """Flush and close all three streams.

        Every stream is closed even if closing an earlier one fails; the
        first failure is re-raised afterwards.
        """
        first_error = None
        for stream in (self.files, self.directories, self.exceptions):
            try:
                stream.close()
            except (OSError, ValueError) as e:
                logger.error("Failed to close %s stream: %s", stream.name, e)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
