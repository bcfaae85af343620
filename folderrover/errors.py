"""Exception hierarchy for FolderRover.

Failures inside a single directory visitation never surface as these
exceptions; they are recorded to the exception stream instead. The
classes here cover configuration problems, output initialization (the
only fatal condition of a run) and sink write failures that the sink
escalates internally.
"""

from typing import Any, Optional


class FolderRoverError(Exception):
    """Base class for all FolderRover errors."""


class ConfigurationError(FolderRoverError):
    """Raised when an InventoryConfig is inconsistent."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid configuration: " + "; ".join(self.problems))


class OutputInitError(FolderRoverError):
    """Raised when the output destinations cannot be created."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot create output file {path}: {cause}")


class SinkWriteError(FolderRoverError):
    """Raised by a RecordStream when its underlying handle fails."""

    def __init__(self, stream: str, record: Any, cause: Optional[Exception] = None):
        self.stream = stream
        self.record = record
        self.cause = cause
        super().__init__(f"Write to {stream} stream failed: {cause}")
