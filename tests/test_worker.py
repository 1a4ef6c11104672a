"""Tests for entry classification and the worker loop"""

import os

import pytest

from dirstat.aggregate import AggregateStore
from dirstat.errors import EntryAccessError
from dirstat.models import NO_EXTENSION
from dirstat.work_queue import WorkQueue
from dirstat.worker import Worker, classify_entry, normalize_extension


class TestNormalizeExtension:
    """Last-dot suffix, lowercased."""

    @pytest.mark.parametrize(
        'name, expected',
        [
            ('a.txt', '.txt'),
            ('b.TXT', '.txt'),
            ('archive.TAR.GZ', '.gz'),
            ('README', NO_EXTENSION),
            ('.bashrc', NO_EXTENSION),
            ('/some/dir.d/Makefile', NO_EXTENSION),
            ('photo.JpEg', '.jpeg'),
        ],
    )
    def test_normalize(self, name, expected):
        assert normalize_extension(name) == expected


class TestClassifyEntry:
    """Regular files become observations; everything else does not."""

    def test_regular_file_from_dir_entry(self, make_tree):
        root = make_tree({'Data.CSV': 42})
        entry = next(e for e in os.scandir(root) if e.name == 'Data.CSV')

        result = classify_entry(entry)

        assert result is not None
        assert result.size == 42
        assert result.extension == '.csv'
        assert result.path == os.path.join(root, 'Data.CSV')
        assert os.path.isabs(result.path)

    def test_regular_file_from_path(self, make_tree):
        root = make_tree({'c': 10})

        result = classify_entry(os.path.join(root, 'c'))

        assert result.size == 10
        assert result.extension == NO_EXTENSION

    def test_directory_is_not_classified(self, make_tree):
        root = make_tree({'sub/x.txt': 1})
        entry = next(e for e in os.scandir(root) if e.name == 'sub')

        assert classify_entry(entry) is None

    def test_missing_file_raises_entry_access_error(self, tmp_path):
        missing = os.path.join(tmp_path, 'gone.txt')

        with pytest.raises(EntryAccessError) as exc_info:
            classify_entry(missing)

        assert exc_info.value.path == missing

    def test_file_deleted_after_listing(self, make_tree):
        root = make_tree({'vanish.log': 5})
        entry = next(e for e in os.scandir(root) if e.name == 'vanish.log')
        os.unlink(entry.path)

        with pytest.raises(EntryAccessError):
            classify_entry(entry)

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason='symlinks not supported')
    def test_broken_symlink_raises(self, tmp_path):
        link = os.path.join(tmp_path, 'dangling.txt')
        os.symlink(os.path.join(tmp_path, 'nowhere'), link)
        entry = next(e for e in os.scandir(tmp_path) if e.name == 'dangling.txt')

        with pytest.raises(EntryAccessError):
            classify_entry(entry)

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason='symlinks not supported')
    def test_symlink_to_file_is_followed(self, make_tree):
        root = make_tree({'target.bin': 64})
        link = os.path.join(root, 'alias.dat')
        os.symlink(os.path.join(root, 'target.bin'), link)
        entry = next(e for e in os.scandir(root) if e.name == 'alias.dat')

        result = classify_entry(entry)

        assert result.size == 64
        assert result.extension == '.dat'


class TestWorker:
    """Worker thread loop."""

    def test_worker_drains_queue_and_exits(self, make_tree):
        root = make_tree({'a.txt': 100, 'b.TXT': 50, 'sub/c': 10})
        queue = WorkQueue()
        store = AggregateStore()
        for entry in os.scandir(root):
            queue.push(entry)
        queue.push(os.path.join(root, 'sub', 'c'))
        queue.close()

        worker = Worker(queue, store, name='test-worker')
        worker.start()
        worker.join(10)

        assert not worker.is_alive()
        # a.txt, b.TXT, sub (directory), sub/c
        assert worker.processed == 4
        snap = store.snapshot(root=root)
        assert snap.file_count == 3
        assert snap.total_bytes == 160
        assert snap.extension_bytes == {'.txt': 150, NO_EXTENSION: 10}

    def test_unreadable_entry_is_skipped_not_fatal(self, make_tree):
        root = make_tree({'keep.txt': 7})
        queue = WorkQueue()
        store = AggregateStore()
        queue.push(os.path.join(root, 'missing.txt'))
        queue.push(os.path.join(root, 'keep.txt'))
        queue.close()

        worker = Worker(queue, store)
        worker.run()

        snap = store.snapshot(root=root)
        assert snap.file_count == 1
        assert snap.total_bytes == 7
        assert snap.skipped_entries == 1
