"""
Periodic synchronization.

Repeats passes on a fixed interval. A pass always runs to completion;
cancellation is only observed between passes.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

from foldermirror.core.logging import get_logger
from foldermirror.core.models import ComparisonMode, SyncResult
from foldermirror.sync.coordinator import SyncCoordinator

logger = get_logger(__name__)


class PassInProgressError(RuntimeError):
    """Raised when a pass is requested while another is still running."""


class PeriodicSyncRunner:
    """Runs synchronization passes one after another on an interval."""

    def __init__(
        self,
        coordinator: SyncCoordinator,
        source: Path,
        replica: Path,
        mode: ComparisonMode = ComparisonMode.METADATA_ONLY,
        interval_seconds: float = 0,
        on_result: Callable[[SyncResult], None] | None = None,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")
        self.coordinator = coordinator
        self.source = Path(source)
        self.replica = Path(replica)
        self.mode = mode
        self.interval_seconds = interval_seconds
        self.on_result = on_result
        self._pass_lock = threading.Lock()
        self._stop = threading.Event()
        self.passes_completed = 0

    @property
    def is_running_pass(self) -> bool:
        return self._pass_lock.locked()

    @property
    def is_stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Request that no further passes start."""
        self._stop.set()

    def run_once(self) -> SyncResult:
        """Run a single pass, refusing to overlap with one already running."""
        if not self._pass_lock.acquire(blocking=False):
            raise PassInProgressError("A synchronization pass is already running")
        try:
            result = self.coordinator.run(self.source, self.replica, self.mode)
            self.passes_completed += 1
        finally:
            self._pass_lock.release()

        if self.on_result is not None:
            try:
                self.on_result(result)
            except Exception as e:
                logger.warning("Result callback error", error=str(e))
        return result

    def run_forever(
        self,
        stop_event: threading.Event | None = None,
        max_passes: int | None = None,
    ) -> list[SyncResult]:
        """Run a pass now, then one per interval until stopped.

        Args:
            stop_event: Event checked between passes; defaults to the
                runner's own, set by ``stop()``
            max_passes: Stop after this many passes

        Returns:
            Results of the passes that ran
        """
        stop = stop_event or self._stop
        results: list[SyncResult] = []

        logger.info(
            "Starting periodic sync",
            interval_seconds=self.interval_seconds,
            source=str(self.source),
            replica=str(self.replica),
        )

        while not stop.is_set():
            results.append(self.run_once())
            if max_passes is not None and len(results) >= max_passes:
                break
            if stop.wait(self.interval_seconds):
                break

        logger.info("Periodic sync stopped", passes=len(results))
        return results
