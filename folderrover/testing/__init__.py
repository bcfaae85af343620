"""Testing utilities for FolderRover consumers."""

from .fixtures import FailingHandle, MemoryHandle, build_tree, tree_files, tree_directories

__all__ = ['FailingHandle', 'MemoryHandle', 'build_tree', 'tree_files', 'tree_directories']
