"""Tests for DirectoryVisitor: one directory at a time, failures isolated."""

import os

import pytest

from folderrover import Counters, DirectoryVisitor, RecordSink
from folderrover.testing import FailingHandle, MemoryHandle, build_tree


@pytest.fixture
def submitted():
    return []


@pytest.fixture
def visitor(memory_sink, submitted):
    return DirectoryVisitor(memory_sink, Counters(), submit_children=submitted.extend)


def file_lines(sink):
    return sink.handles[0].lines()


def dir_lines(sink):
    return sink.handles[1].lines()


def exception_lines(sink):
    return sink.handles[2].lines()


class TestVisit:

    def test_records_immediate_contents_only(self, tmp_path, visitor, memory_sink, submitted):
        build_tree(tmp_path, {"one.txt": 10, "two.txt": 20, "a": {"nested.txt": 5}})
        root = str(tmp_path)

        visitor.visit(root)

        assert sorted(file_lines(memory_sink)) == sorted([
            f"{os.path.join(root, 'one.txt')},10",
            f"{os.path.join(root, 'two.txt')},20",
        ])
        assert dir_lines(memory_sink) == [os.path.join(root, "a")]
        assert submitted == [os.path.join(root, "a")]
        assert exception_lines(memory_sink) == []
        assert visitor.counters.snapshot() == (2, 1, 0)

    def test_root_itself_is_not_recorded(self, tmp_path, visitor, memory_sink):
        visitor.visit(str(tmp_path))

        assert dir_lines(memory_sink) == []
        assert file_lines(memory_sink) == []

    def test_every_subdirectory_submitted(self, tmp_path, visitor, submitted):
        build_tree(tmp_path, {f"d{i:03d}": {} for i in range(150)})

        visitor.visit(str(tmp_path))

        assert sorted(submitted) == sorted(str(tmp_path / f"d{i:03d}") for i in range(150))
        assert visitor.counters.directories == 150

    def test_empty_file_recorded_with_zero_size(self, tmp_path, visitor, memory_sink):
        build_tree(tmp_path, {"empty": b""})

        visitor.visit(str(tmp_path))

        assert file_lines(memory_sink) == [f"{tmp_path / 'empty'},0"]


class TestFailures:

    def test_unlistable_directory_yields_one_exception(self, tmp_path, visitor, memory_sink, submitted):
        missing = str(tmp_path / "vanished")

        visitor.visit(missing)

        lines = exception_lines(memory_sink)
        assert len(lines) == 1
        assert lines[0].startswith(f"{missing}: FileNotFoundError: ")
        assert file_lines(memory_sink) == []
        assert submitted == []
        assert visitor.counters.snapshot() == (0, 0, 1)

    def test_listing_failure_emits_nothing_else(self, tmp_path, visitor, memory_sink, deny_listing):
        build_tree(tmp_path, {"locked": {"secret.txt": 3, "inner": {}}})
        deny_listing.add("locked")

        visitor.visit(str(tmp_path / "locked"))

        assert file_lines(memory_sink) == []
        assert dir_lines(memory_sink) == []
        assert len(exception_lines(memory_sink)) == 1
        assert "PermissionError" in exception_lines(memory_sink)[0]

    def test_file_passed_as_directory(self, tmp_path, visitor, memory_sink):
        build_tree(tmp_path, {"plain.txt": 4})

        visitor.visit(str(tmp_path / "plain.txt"))

        assert "NotADirectoryError" in exception_lines(memory_sink)[0]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_stat_failure_skips_only_that_file(self, tmp_path, memory_sink, submitted):
        build_tree(tmp_path, {"good.txt": 7})
        os.symlink(tmp_path / "does-not-exist", tmp_path / "dangling")
        visitor = DirectoryVisitor(memory_sink, Counters(), submitted.extend, follow_symlinks=True)

        visitor.visit(str(tmp_path))

        assert file_lines(memory_sink) == [f"{tmp_path / 'good.txt'},7"]
        lines = exception_lines(memory_sink)
        assert len(lines) == 1
        assert lines[0].startswith(f"{tmp_path / 'dangling'}: FileNotFoundError")
        assert visitor.counters.snapshot() == (1, 0, 1)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_directory_symlink_not_followed_by_default(self, tmp_path, visitor, memory_sink, submitted):
        build_tree(tmp_path, {"real": {"x.txt": 1}})
        os.symlink(tmp_path / "real", tmp_path / "alias")

        visitor.visit(str(tmp_path))

        assert submitted == [str(tmp_path / "real")]
        assert [line.rpartition(",")[0] for line in file_lines(memory_sink)] == [
            str(tmp_path / "alias")
        ]

    def test_file_stream_failure_becomes_exception_record(self, tmp_path):
        build_tree(tmp_path, {"a.txt": 1, "b.txt": 2, "sub": {}})
        exceptions = MemoryHandle()
        directories = MemoryHandle()
        sink = RecordSink(FailingHandle(), directories, exceptions)
        visitor = DirectoryVisitor(sink, Counters())

        visitor.visit(str(tmp_path))

        lines = exceptions.lines()
        assert len(lines) == 2
        assert all("SinkWriteError" in line for line in lines)
        assert directories.lines() == [str(tmp_path / "sub")]
        assert visitor.counters.snapshot() == (0, 1, 2)

    def test_unreportable_failure_is_not_counted(self, tmp_path):
        sink = RecordSink(MemoryHandle(), MemoryHandle(), FailingHandle())
        visitor = DirectoryVisitor(sink, Counters())

        visitor.visit(str(tmp_path / "missing"))

        assert visitor.counters.exceptions == 0
        assert len(sink.unreported) == 1
        assert sink.unreported[0].context == str(tmp_path / "missing")

    def test_on_error_callback_receives_failures(self, tmp_path, memory_sink):
        seen = []
        visitor = DirectoryVisitor(memory_sink, Counters(),
                                   on_error=lambda context, error: seen.append((context, type(error))))

        visitor.visit(str(tmp_path / "missing"))

        assert seen == [(str(tmp_path / "missing"), FileNotFoundError)]

    def test_failing_on_error_callback_does_not_propagate(self, tmp_path, memory_sink):
        def explode(context, error):
            raise RuntimeError("callback bug")

        visitor = DirectoryVisitor(memory_sink, Counters(), on_error=explode)

        visitor.visit(str(tmp_path / "missing"))

        assert visitor.counters.exceptions == 1
