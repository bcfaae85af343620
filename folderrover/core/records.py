"""Record types written to the three inventory streams.

Each record knows how to render itself as one output line (without the
trailing newline, which the stream adds).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileRecord:
    """A file encountered during traversal: absolute path and byte length."""

    path: str
    size: int

    def to_line(self) -> str:
        return f"{self.path},{self.size}"


@dataclass(frozen=True)
class DirectoryRecord:
    """A (non-root) directory encountered during traversal."""

    path: str

    def to_line(self) -> str:
        return self.path


@dataclass(frozen=True)
class ExceptionRecord:
    """A failure observed while visiting ``context``."""

    context: str
    description: str

    @classmethod
    def from_error(cls, context: str, error: BaseException) -> 'ExceptionRecord':
        """Build a record whose description is ``<ExceptionType>: <message>``."""
        return cls(context=context, description=f"{type(error).__name__}: {error}")

    def to_line(self) -> str:
        # Multi-line messages would break the one-record-per-line format
        description = " ".join(self.description.splitlines())
        return f"{self.context}: {description}"
