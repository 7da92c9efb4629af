"""
Tests for the document file watcher.
"""
import json

import pytest
from watchdog.events import DirModifiedEvent, FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from services.watcher import DocumentFileHandler, DocumentWatcher


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestDocumentFileHandler:

    def test_reacts_to_watched_file(self, tmp_path):
        watched = _write(tmp_path / "a.json", {"v": 1})
        changes = []
        handler = DocumentFileHandler([watched], changes.append)

        handler.on_modified(FileModifiedEvent(watched))
        assert changes == [watched]

    def test_same_version_reported_once(self, tmp_path):
        watched = _write(tmp_path / "a.json", {"v": 1})
        changes = []
        handler = DocumentFileHandler([watched], changes.append)

        handler.on_modified(FileModifiedEvent(watched))
        handler.on_created(FileCreatedEvent(watched))
        assert len(changes) == 1

    def test_ignores_other_files(self, tmp_path):
        watched = _write(tmp_path / "a.json", {"v": 1})
        other = _write(tmp_path / "b.json", {"v": 2})
        changes = []
        handler = DocumentFileHandler([watched], changes.append)

        handler.on_modified(FileModifiedEvent(other))
        handler.on_modified(DirModifiedEvent(str(tmp_path)))
        assert changes == []

    def test_move_onto_watched_file(self, tmp_path):
        watched = _write(tmp_path / "a.json", {"v": 1})
        changes = []
        handler = DocumentFileHandler([watched], changes.append)

        handler.on_moved(FileMovedEvent(str(tmp_path / "a.json.tmp"), watched))
        assert changes == [watched]

    def test_callback_errors_are_contained(self, tmp_path):
        watched = _write(tmp_path / "a.json", {"v": 1})

        def failing(_path):
            raise RuntimeError("boom")

        handler = DocumentFileHandler([watched], failing)
        handler.on_modified(FileModifiedEvent(watched))

    def test_deleted_file_ignored(self, tmp_path):
        watched = str(tmp_path / "gone.json")
        changes = []
        handler = DocumentFileHandler([watched], changes.append)

        handler.on_modified(FileModifiedEvent(watched))
        assert changes == []


class TestDocumentWatcher:

    def test_reload(self, tmp_path):
        first = _write(tmp_path / "a.json", {"id": "one"})
        second = _write(tmp_path / "b.json", {"id": "two"})
        received = []
        watcher = DocumentWatcher([first, second], received.append)

        documents = watcher.reload()
        assert [d.label for d in documents] == ["one", "two"]
        assert received == [documents]

    def test_reload_with_invalid_file(self, tmp_path):
        first = _write(tmp_path / "a.json", {"id": "one"})
        broken = tmp_path / "b.json"
        broken.write_text("{", encoding="utf-8")
        received = []
        watcher = DocumentWatcher([first, str(broken)], received.append)

        assert watcher.reload() is None
        assert received == []

    def test_directories_deduplicated(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        watcher = DocumentWatcher(
            [str(tmp_path / "a.json"), str(sub / "b.json"), str(tmp_path / "c.json")],
            lambda docs: None
        )
        assert watcher.directories == [str(tmp_path), str(sub)]

    def test_start_missing_directory(self, tmp_path):
        watcher = DocumentWatcher([str(tmp_path / "missing" / "a.json")], lambda docs: None)
        with pytest.raises(FileNotFoundError):
            watcher.start()
        assert not watcher.is_running()

    def test_start_and_stop(self, tmp_path):
        path = _write(tmp_path / "a.json", {"v": 1})
        watcher = DocumentWatcher([path], lambda docs: None, debounce_seconds=0)

        watcher.start()
        try:
            assert watcher.is_running()
        finally:
            watcher.stop()
        assert not watcher.is_running()
