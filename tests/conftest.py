"""Shared fixtures for the FolderRover test suite."""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from folderrover import RecordSink
from folderrover.core.visitor import DirectoryVisitor
from folderrover.testing import MemoryHandle


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large trees, excluded by run_tests.py")


@pytest.fixture
def memory_sink():
    """RecordSink over in-memory handles; ``sink.handles`` exposes them."""
    handles = (MemoryHandle(), MemoryHandle(), MemoryHandle())
    sink = RecordSink(*handles)
    sink.handles = handles
    yield sink
    sink.close()


@pytest.fixture
def deny_listing(monkeypatch):
    """Make listing fail with PermissionError for directories named in the returned set.

    Running as root makes chmod-based denial unreliable, so the failure
    is injected at the visitor's listing step instead.
    """
    denied = set()
    real_list = DirectoryVisitor._list

    def guarded_list(self, path):
        if os.path.basename(path) in denied:
            raise PermissionError(13, "Permission denied", path)
        return real_list(self, path)

    monkeypatch.setattr(DirectoryVisitor, "_list", guarded_list)
    return denied
