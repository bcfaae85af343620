"""Concurrent traversal engine components.

Leaf-first: records and counters, the record sink, the completion
detector, the bounded scheduler and the directory visitor.
"""

from .records import FileRecord, DirectoryRecord, ExceptionRecord
from .counters import Counters, CounterSnapshot
from .sink import RecordStream, RecordSink
from .completion import OutstandingWork
from .scheduler import BoundedScheduler
from .visitor import DirectoryVisitor

__all__ = [
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
]
