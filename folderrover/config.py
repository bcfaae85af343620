"""Configuration system for FolderRover.

This module defines how callers tune an inventory run: the admission
batch size, the worker pool size, symlink handling and the names of the
three output files. The command line takes no flags, so the same
settings can also be supplied through environment variables.
"""

import codecs
import os
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional

from .errors import ConfigurationError


# Largest number of child directories a single visitation admits in one burst
DEFAULT_CHUNK_SIZE = 60

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class InventoryConfig:
    """Complete configuration for an inventory run.

    Attributes:
        chunk_size: Maximum number of subdirectories admitted per batch
        max_workers: Worker pool size (None lets the executor decide)
        follow_symlinks: Traverse symlinked directories and stat link targets
        poll_interval: Seconds between completion checks / progress updates
        files_name: File name of the file-inventory stream
        directories_name: File name of the directory-inventory stream
        exceptions_name: File name of the exception stream
        encoding: Text encoding of the three output files
        errors: Encoding error handler for the output files. The default
            "surrogateescape" writes undecodable POSIX file names back as
            their original bytes
        on_error: Optional callback invoked with (context, error) whenever
            an exception record is produced
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_workers: Optional[int] = None
    follow_symlinks: bool = False
    poll_interval: float = 0.1

    files_name: str = "FileInventory.txt"
    directories_name: str = "DirInventory.txt"
    exceptions_name: str = "FolderRover_Exceptions.txt"
    encoding: str = "utf-8"
    errors: str = "surrogateescape"

    on_error: Optional[Callable[[str, Exception], None]] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'InventoryConfig':
        """Create a config from FOLDERROVER_* environment variables.

        Recognised variables: FOLDERROVER_WORKERS, FOLDERROVER_CHUNK_SIZE,
        FOLDERROVER_FOLLOW_SYMLINKS and FOLDERROVER_POLL_INTERVAL. Unset
        variables keep their defaults.

        Raises:
            ConfigurationError: If a variable cannot be parsed or the
                resulting config does not validate
        """
        env = os.environ if environ is None else environ
        config = cls()
        problems = []

        raw = env.get("FOLDERROVER_WORKERS")
        if raw:
            try:
                config.max_workers = int(raw)
            except ValueError:
                problems.append(f"FOLDERROVER_WORKERS must be an integer, got {raw!r}")

        raw = env.get("FOLDERROVER_CHUNK_SIZE")
        if raw:
            try:
                config.chunk_size = int(raw)
            except ValueError:
                problems.append(f"FOLDERROVER_CHUNK_SIZE must be an integer, got {raw!r}")

        raw = env.get("FOLDERROVER_FOLLOW_SYMLINKS")
        if raw is not None:
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                config.follow_symlinks = True
            elif value in _FALSE_VALUES:
                config.follow_symlinks = False
            else:
                problems.append(f"FOLDERROVER_FOLLOW_SYMLINKS must be a boolean, got {raw!r}")

        raw = env.get("FOLDERROVER_POLL_INTERVAL")
        if raw:
            try:
                config.poll_interval = float(raw)
            except ValueError:
                problems.append(f"FOLDERROVER_POLL_INTERVAL must be a number, got {raw!r}")

        if problems:
            raise ConfigurationError(problems)
        config.ensure_valid()
        return config

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.chunk_size <= 0:
            errors.append("chunk_size must be positive")

        if self.max_workers is not None and self.max_workers <= 0:
            errors.append("max_workers must be positive")

        if self.poll_interval <= 0:
            errors.append("poll_interval must be positive")

        names = [self.files_name, self.directories_name, self.exceptions_name]
        if any(not name for name in names):
            errors.append("output file names cannot be empty")
        elif len(set(names)) != len(names):
            errors.append("output file names must be distinct")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"unknown encoding: {self.encoding}")
        try:
            codecs.lookup_error(self.errors)
        except LookupError:
            errors.append(f"unknown encoding error handler: {self.errors}")

        return errors

    def ensure_valid(self) -> None:
        """Raise ConfigurationError if validate() reports any problem."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors)
