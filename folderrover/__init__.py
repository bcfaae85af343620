"""FolderRover - concurrent filesystem inventory.

FolderRover traverses a directory tree with a pool of worker threads and
records every file (path and size), every directory and every access
failure into three append-only output streams. Sibling subdirectories
are visited in parallel; completion is detected with an explicit
outstanding-work count.

Quick start:
    from folderrover import inventory_tree
    stats = inventory_tree("/data", "/tmp/inventory")

Embedding with an already-open sink:
    from folderrover import FolderRover, RecordSink
    with RecordSink(files_fh, dirs_fh, errors_fh) as sink:
        FolderRover(sink).run("/data")
"""

__version__ = "0.1.0"

from .config import InventoryConfig, DEFAULT_CHUNK_SIZE
from .errors import (
    FolderRoverError,
    ConfigurationError,
    OutputInitError,
    SinkWriteError,
)
from .core import (
    FileRecord,
    DirectoryRecord,
    ExceptionRecord,
    Counters,
    CounterSnapshot,
    RecordStream,
    RecordSink,
    OutstandingWork,
    BoundedScheduler,
    DirectoryVisitor,
)
from .engine import FolderRover
from .api import inventory_tree, scan_tree, read_inventory

__all__ = [
    '__version__',
    # Configuration
    'InventoryConfig',
    'DEFAULT_CHUNK_SIZE',
    # Errors
    'FolderRoverError',
    'ConfigurationError',
    'OutputInitError',
    'SinkWriteError',
    # Core
    'FileRecord',
    'DirectoryRecord',
    'ExceptionRecord',
    'Counters',
    'CounterSnapshot',
    'RecordStream',
    'RecordSink',
    'OutstandingWork',
    'BoundedScheduler',
    'DirectoryVisitor',
    # Engine and API
    'FolderRover',
    'inventory_tree',
    'scan_tree',
    'read_inventory',
]
