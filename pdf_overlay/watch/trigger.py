"""Single-slot refresh queue for pipeline runs."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class RefreshTrigger:
    """Serialize runs of ``job`` with at most one run pending.

    A request made while a run is in flight only marks a re-run as pending;
    the thread that owns the current run picks it up when it finishes. Job
    failures are logged and counted so later requests keep working.
    """

    def __init__(self, job: Callable[[], object]) -> None:
        self._job = job
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self.completed_runs = 0
        self.failed_runs = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def request(self) -> bool:
        """Run now, or queue one re-run; returns True if this call ran the job."""
        with self._lock:
            if self._running:
                self._pending = True
                return False
            self._running = True

        try:
            while True:
                self._run_once()
                with self._lock:
                    if not self._pending:
                        self._running = False
                        return True
                    self._pending = False
        except BaseException:
            with self._lock:
                self._running = False
                self._pending = False
            raise

    def _run_once(self) -> None:
        try:
            self._job()
        except Exception:
            self.failed_runs += 1
            logger.exception("Overlay run failed; waiting for the next change")
        else:
            self.completed_runs += 1
