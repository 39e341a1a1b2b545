"""Re-run the overlay whenever the position or value file changes."""

from __future__ import annotations

import logging
from pathlib import Path
import signal
import sys
from typing import Callable, Iterable

from PySide6.QtCore import QCoreApplication, QFileSystemWatcher

from pdf_overlay.watch.trigger import RefreshTrigger

logger = logging.getLogger(__name__)


class ConfigWatcher:
    """Wire a ``QFileSystemWatcher`` to a refresh trigger.

    Editors often save by replacing the file, which drops it from the watch
    list. Parent directories are watched too so a replaced file is picked up
    again once it reappears.
    """

    def __init__(self, paths: Iterable[Path], trigger: RefreshTrigger) -> None:
        self._paths = [str(path.resolve()) for path in paths]
        self._trigger = trigger
        self._watcher = QFileSystemWatcher()

        existing = [path for path in self._paths if Path(path).exists()]
        missing = sorted(set(self._paths) - set(existing))
        for path in missing:
            logger.warning("Config file does not exist yet: %s", path)
        if existing:
            self._watcher.addPaths(existing)

        directories = sorted({str(Path(path).parent) for path in self._paths})
        self._watcher.addPaths(directories)

        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_directory_changed)

    def watched_files(self) -> list[str]:
        return list(self._watcher.files())

    def _on_file_changed(self, path: str) -> None:
        logger.info("Change detected: %s", path)
        self._rewatch(path)
        self._trigger.request()

    def _on_directory_changed(self, directory: str) -> None:
        # Only re-added config files count; other files in the directory
        # (the output PDF included) must not trigger a run.
        restored = [
            path
            for path in self._paths
            if str(Path(path).parent) == directory and self._rewatch(path)
        ]
        if restored:
            logger.info("Config file replaced: %s", ", ".join(restored))
            self._trigger.request()

    def _rewatch(self, path: str) -> bool:
        if path in self._watcher.files() or not Path(path).exists():
            return False
        return self._watcher.addPath(path)


def watch(paths: Iterable[Path], job: Callable[[], object]) -> int:
    """Run ``job`` once, then again on every config change, until terminated."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    trigger = RefreshTrigger(job)
    watcher = ConfigWatcher(paths, trigger)
    logger.info("Watching %s", ", ".join(watcher.watched_files()) or "nothing")

    trigger.request()
    return app.exec()
