"""
File watcher for DocCompare.

Uses watchdog to monitor the files being compared and reload them
whenever one of them changes, so the comparison can be recomputed.
"""
import os
import time
import logging
from pathlib import Path
from typing import Callable, Optional

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler, FileSystemEvent

from core.file_parser import parse_json_documents, ParsedDocument

logger = logging.getLogger(__name__)


class DocumentFileHandler(FileSystemEventHandler):
    """
    Handles file system events for the compared files.

    Events for other files in the same directories are ignored, as are
    repeated events for a file whose modification time has not changed.
    """

    def __init__(self, watched_paths, on_file_changed: Callable[[str], None], debounce_seconds: float = 0.0):
        """
        Initialize handler.

        Args:
            watched_paths: Paths of the files to react to
            on_file_changed: Callback with the absolute path that changed
            debounce_seconds: Delay before reporting, lets writers finish
        """
        self.watched_paths = {os.path.abspath(p) for p in watched_paths}
        self.on_file_changed = on_file_changed
        self.debounce_seconds = debounce_seconds
        self._seen_versions: dict[str, float] = {}

    def on_created(self, event: FileSystemEvent):
        if not event.is_directory:
            self._process_file(event.src_path)

    def on_modified(self, event: FileSystemEvent):
        if not event.is_directory:
            self._process_file(event.src_path)

    def on_moved(self, event: FileSystemEvent):
        """Editors that save via rename show up as a move onto the watched file."""
        if not event.is_directory:
            self._process_file(event.dest_path)

    def _process_file(self, file_path):
        if isinstance(file_path, bytes):
            file_path = os.fsdecode(file_path)
        abs_path = os.path.abspath(file_path)

        if abs_path not in self.watched_paths:
            return

        if self.debounce_seconds > 0:
            time.sleep(self.debounce_seconds)

        try:
            mtime = os.path.getmtime(abs_path)
        except OSError:
            return

        # Skip if already processed this version
        if self._seen_versions.get(abs_path) == mtime:
            return
        self._seen_versions[abs_path] = mtime

        logger.info(f"Detected change: {abs_path}")

        try:
            self.on_file_changed(abs_path)
        except Exception as e:
            logger.error(f"Error handling change to {abs_path}: {e}")


class DocumentWatcher:
    """
    Watches a set of JSON files and reloads them when any of them changes.

    Usage:
        watcher = DocumentWatcher(["a.json", "b.json"], callback)
        watcher.start()
        # ... later
        watcher.stop()
    """

    def __init__(
        self,
        file_paths: list[str],
        on_documents: Callable[[list[ParsedDocument]], None],
        split_arrays: bool = False,
        debounce_seconds: float = 0.5
    ):
        """
        Initialize the watcher.

        Args:
            file_paths: Files to compare, in order
            on_documents: Callback with the freshly loaded documents
            split_arrays: Treat top-level arrays as several documents
            debounce_seconds: Delay between a change and the reload
        """
        self.file_paths = [str(Path(p).absolute()) for p in file_paths]
        self.on_documents = on_documents
        self.split_arrays = split_arrays
        self.debounce_seconds = debounce_seconds

        self._observer: Optional[Observer] = None
        self._handler: Optional[DocumentFileHandler] = None
        self._running = False

    @property
    def directories(self) -> list[str]:
        seen = []
        for path in self.file_paths:
            directory = str(Path(path).parent)
            if directory not in seen:
                seen.append(directory)
        return seen

    def reload(self) -> Optional[list[ParsedDocument]]:
        """Load all files and pass them to the callback; None if any fails to load."""
        try:
            documents = parse_json_documents(self.file_paths, split_arrays=self.split_arrays)
        except ValueError as e:
            logger.warning(f"Skipping comparison: {e}")
            return None

        self.on_documents(documents)
        return documents

    def start(self):
        """Start watching the files' directories."""
        if self._running:
            logger.warning("Watcher already running")
            return

        for directory in self.directories:
            if not Path(directory).is_dir():
                logger.error(f"Watch directory does not exist: {directory}")
                raise FileNotFoundError(f"Watch directory not found: {directory}")

        logger.info(f"Starting watcher on {len(self.file_paths)} file(s)")

        self._handler = DocumentFileHandler(
            self.file_paths,
            lambda _path: self.reload(),
            debounce_seconds=self.debounce_seconds
        )
        self._observer = Observer()
        for directory in self.directories:
            self._observer.schedule(self._handler, directory, recursive=False)
        self._observer.start()
        self._running = True

        logger.info("Watcher started")

    def stop(self):
        """Stop watching."""
        if not self._running:
            return

        logger.info("Stopping watcher")

        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

        self._handler = None
        self._running = False

        logger.info("Watcher stopped")

    def is_running(self) -> bool:
        """Check if watcher is running."""
        return self._running
