"""
FolderMirror run coordinator.

Runs one complete pass: validate roots, mirror the source tree, sweep
orphans, and hand back the counters.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from foldermirror.core.config import SyncConfig
from foldermirror.core.logging import (
    LogLevel,
    LogSink,
    OperationLogger,
    StructlogSink,
    get_logger,
    safe_emit,
)
from foldermirror.core.models import ComparisonMode, SyncResult, SyncTally
from foldermirror.platform import file_ops
from foldermirror.sync.comparator import EntryComparator
from foldermirror.sync.mirror import TreeMirror
from foldermirror.sync.sweep import DeletionSweep
from foldermirror.sync.verifier import ContentVerifier

logger = get_logger(__name__)


class SourceUnavailableError(FileNotFoundError):
    """Raised when a pass cannot start because a root is unusable."""


class SyncCoordinator:
    """Orchestrates synchronization passes from a source to a replica."""

    def __init__(
        self,
        sink: LogSink | None = None,
        verifier: ContentVerifier | None = None,
    ) -> None:
        self.sink = sink or StructlogSink()
        self.comparator = EntryComparator(self.sink, verifier)
        self.tree_mirror = TreeMirror(self.comparator, self.sink)
        self.deletion_sweep = DeletionSweep(self.sink)

    @classmethod
    def from_config(cls, config: SyncConfig, sink: LogSink | None = None) -> SyncCoordinator:
        verifier = ContentVerifier(
            algorithm=config.hash_algorithm,
            chunk_size=config.chunk_size_bytes,
        )
        return cls(sink=sink, verifier=verifier)

    def run(
        self,
        source_root: Path,
        replica_root: Path,
        mode: ComparisonMode = ComparisonMode.METADATA_ONLY,
    ) -> SyncResult:
        """Run one pass and return its counters.

        No exception escapes: a missing source root aborts the pass with one
        counted error, every other failure is counted per item.
        """
        source_root = Path(source_root)
        replica_root = Path(replica_root)
        tally = SyncTally()

        with OperationLogger(
            "sync pass",
            logger,
            source=str(source_root),
            replica=str(replica_root),
            mode=mode.value,
        ) as operation:
            try:
                self._validate_source(source_root)
                self._ensure_replica(replica_root, tally)
            except SourceUnavailableError as exc:
                self._log(LogLevel.ERROR, f"Synchronization failed: {exc}")
                tally.errors_encountered += 1
            else:
                self.tree_mirror.mirror(source_root, replica_root, mode, tally)
                self.deletion_sweep.sweep(source_root, replica_root, tally)
                self._log(LogLevel.INFO, "Synchronization completed successfully")

            result = tally.to_result(source_root, replica_root, mode, ended_at=datetime.now())
            operation.update(**result.to_dict()["summary"])

        return result

    def _validate_source(self, source_root: Path) -> None:
        # Roots are followed when they are links, entries inside the tree are not
        try:
            found = source_root.is_dir()
        except OSError as exc:
            raise SourceUnavailableError(
                f"Source directory not accessible: {source_root}: {exc}"
            ) from exc
        if not found:
            raise SourceUnavailableError(f"Source directory not found: {source_root}")
        if not os.access(source_root, os.R_OK | os.X_OK):
            raise SourceUnavailableError(f"Source directory not accessible: {source_root}")
        try:
            file_ops.list_directories(source_root)
        except OSError as exc:
            raise SourceUnavailableError(
                f"Source directory not accessible: {source_root}: {exc}"
            ) from exc

    def _ensure_replica(self, replica_root: Path, tally: SyncTally) -> None:
        try:
            if replica_root.is_dir():
                return
            occupied = replica_root.exists() or replica_root.is_symlink()
        except OSError as exc:
            raise SourceUnavailableError(
                f"Replica directory not accessible: {replica_root}: {exc}"
            ) from exc
        if occupied:
            raise SourceUnavailableError(f"Replica path is not a directory: {replica_root}")
        try:
            replica_root.mkdir(parents=True)
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot create replica directory {replica_root}: {exc}"
            ) from exc
        tally.directories_created += 1
        self._log(LogLevel.INFO, f"Created replica directory: {replica_root}")

    def _log(self, level: LogLevel, message: str) -> None:
        safe_emit(self.sink, level, message)


def run(
    source_root: Path,
    replica_root: Path,
    mode: ComparisonMode = ComparisonMode.METADATA_ONLY,
    sink: LogSink | None = None,
) -> SyncResult:
    """Run a single synchronization pass."""
    return SyncCoordinator(sink=sink).run(source_root, replica_root, mode)
