"""High-level API for FolderRover.

Provides simple functions for common inventory operations:
inventorying a tree into an output directory, inventorying into an
already-open sink, and reading an inventory back.
"""

import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .config import InventoryConfig
from .core import DirectoryRecord, ExceptionRecord, FileRecord, RecordSink
from .engine import FolderRover

PathLike = Union[str, Path]
ProgressCallback = Callable[[Dict[str, int]], None]

# <context>: <ExceptionType>: <message>; the context is a path that may contain ": "
_EXCEPTION_LINE = re.compile(r"^(?P<context>.*?): (?P<description>[A-Z][\w.]*(?:Error|Exception|Warning): .*)$")


def scan_tree(
    root: PathLike,
    sink: RecordSink,
    config: Optional[InventoryConfig] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """Inventory a tree into an already-open sink.

    The caller keeps ownership of ``sink``; it is left open.

    Args:
        root: Directory to inventory
        sink: Destination of the file, directory and exception records
        config: Run configuration
        progress_callback: Receives progress dicts while the run is active

    Returns:
        Final statistics dictionary
    """
    with FolderRover(sink, config) as rover:
        return rover.run(os.fspath(root), progress_callback=progress_callback)


def inventory_tree(
    root: PathLike,
    output_dir: PathLike,
    config: Optional[InventoryConfig] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """Inventory a tree into the three output files inside ``output_dir``.

    The files are created (or truncated) before traversal starts and are
    flushed and closed only after every directory has been visited.

    Args:
        root: Directory to inventory
        output_dir: Existing directory that receives the output files
        config: Run configuration
        progress_callback: Receives progress dicts while the run is active

    Returns:
        Final statistics dictionary

    Raises:
        OutputInitError: If the output files cannot be created
        ConfigurationError: If the configuration does not validate

    Example:
        stats = inventory_tree("/data", "/tmp/inventory")
        print(f"{stats['files']} files in {stats['directories']} directories")
    """
    config = config or InventoryConfig()
    config.ensure_valid()
    with RecordSink.open(os.fspath(output_dir), config) as sink:
        return scan_tree(root, sink, config, progress_callback)


def read_inventory(
    output_dir: PathLike,
    config: Optional[InventoryConfig] = None,
) -> Dict[str, List[Any]]:
    """Parse the three output files of a run back into records.

    Returns:
        Dictionary with 'files', 'directories' and 'exceptions' record lists
    """
    config = config or InventoryConfig()
    base = Path(output_dir)

    def lines(name: str) -> List[str]:
        text = (base / name).read_text(encoding=config.encoding, errors=config.errors)
        return [line for line in text.split("\n") if line]

    files = []
    for line in lines(config.files_name):
        # Paths may contain commas; the size follows the last one
        path, _, size = line.rpartition(",")
        files.append(FileRecord(path, int(size)))

    directories = [DirectoryRecord(line) for line in lines(config.directories_name)]

    exceptions = []
    for line in lines(config.exceptions_name):
        match = _EXCEPTION_LINE.match(line)
        if match:
            exceptions.append(ExceptionRecord(match.group("context"), match.group("description")))
        else:
            context, _, description = line.partition(": ")
            exceptions.append(ExceptionRecord(context, description))

    return {
        'files': files,
        'directories': directories,
        'exceptions': exceptions,
    }
