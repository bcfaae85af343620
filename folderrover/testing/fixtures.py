"""Test fixtures for FolderRover consumers.

Helpers to lay out a directory tree from a nested dict and to compute
the inventory such a tree is expected to produce.
"""

import io
import os
from pathlib import Path
from typing import Any, Dict, List, Set, Tuple, Union


def build_tree(root: Union[str, Path], layout: Dict[str, Any]) -> Path:
    """Create files and directories under ``root`` from a nested dict.

    Keys are entry names. A dict value creates a subdirectory described
    by that dict; an int creates a file of that many bytes; a str or
    bytes value creates a file with that content.

    Example:
        build_tree(tmp_path, {"a.txt": 10, "sub": {"b.bin": 5}, "empty": {}})

    Returns:
        The root path
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            build_tree(path, value)
        elif isinstance(value, int):
            path.write_bytes(b"x" * value)
        elif isinstance(value, bytes):
            path.write_bytes(value)
        else:
            path.write_text(value)
    return root


def tree_files(root: Union[str, Path]) -> Set[Tuple[str, int]]:
    """Set of (absolute path, size) for every file below ``root`` (symlink-free trees)."""
    result = set()
    for dirpath, _, filenames in os.walk(os.path.abspath(root)):
        for name in filenames:
            path = os.path.join(dirpath, name)
            result.add((path, os.lstat(path).st_size))
    return result


def tree_directories(root: Union[str, Path]) -> Set[str]:
    """Set of absolute paths of every directory below (not including) ``root``."""
    result = set()
    for dirpath, dirnames, _ in os.walk(os.path.abspath(root)):
        for name in dirnames:
            result.add(os.path.join(dirpath, name))
    return result


class MemoryHandle(io.StringIO):
    """In-memory text handle whose contents stay readable after close().

    Useful for building a RecordSink without touching the filesystem:
        sink = RecordSink(MemoryHandle(), MemoryHandle(), MemoryHandle())
    """

    final_value = ""

    def close(self):
        if not self.closed:
            self.final_value = self.getvalue()
        super().close()

    def lines(self) -> List[str]:
        """Non-empty lines written so far."""
        value = self.final_value if self.closed else self.getvalue()
        return [line for line in value.split("\n") if line]


class FailingHandle(MemoryHandle):
    """Handle whose writes fail like a full disk."""

    def write(self, text):
        raise OSError(28, "No space left on device")
