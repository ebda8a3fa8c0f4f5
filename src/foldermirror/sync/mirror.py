"""
Tree mirroring: replicate the source tree's directories and files.

Traversal uses an explicit stack of directory pairs, so nesting depth
never grows the Python call stack.
"""

from __future__ import annotations

from pathlib import Path

from foldermirror.core.logging import LogLevel, LogSink, safe_emit
from foldermirror.core.models import ComparisonMode, DirectoryPair, SyncTally
from foldermirror.platform import file_ops
from foldermirror.sync.comparator import EntryComparator


class TreeMirror:
    """Copies new and changed files and creates missing directories."""

    def __init__(self, comparator: EntryComparator, sink: LogSink) -> None:
        self.comparator = comparator
        self.sink = sink

    def mirror(
        self,
        source_root: Path,
        replica_root: Path,
        mode: ComparisonMode,
        tally: SyncTally,
    ) -> None:
        """Mirror ``source_root`` into ``replica_root``.

        Never raises for filesystem failures: each one is logged, counted in
        ``tally.errors_encountered`` and traversal moves on.
        """
        stack = [DirectoryPair(source=source_root, replica=replica_root)]

        while stack:
            pair = stack.pop()
            try:
                self._sync_files(pair, mode, tally)
                # Reversed so that siblings are popped in name order
                stack.extend(reversed(self._sync_subdirectories(pair, tally)))
            except OSError as exc:
                self._log(LogLevel.ERROR, f"Error processing directory {pair.source}: {exc}")
                tally.errors_encountered += 1

    def _sync_files(self, pair: DirectoryPair, mode: ComparisonMode, tally: SyncTally) -> None:
        for source_file in file_ops.list_files(pair.source):
            self._sync_file(source_file, pair.replica / source_file.name, mode, tally)

    def _sync_file(
        self,
        source_file: Path,
        replica_file: Path,
        mode: ComparisonMode,
        tally: SyncTally,
    ) -> None:
        try:
            if file_ops.is_directory(replica_file):
                try:
                    directories, files = file_ops.delete_tree(replica_file)
                except file_ops.TreeRemovalError as exc:
                    tally.directories_deleted += exc.directories
                    tally.files_deleted += exc.files
                    raise
                tally.directories_deleted += directories
                tally.files_deleted += files
                self._log(LogLevel.INFO, f"Removed directory in place of file: {replica_file}")

            outcome = self.comparator.decide(source_file, replica_file, mode)
            if not outcome.requires_copy:
                return

            existed = replica_file.is_file()
            if existed:
                file_ops.clear_readonly(replica_file)
            file_ops.copy_file(source_file, replica_file)

            if existed:
                tally.files_updated += 1
                self._log(LogLevel.INFO, f"Updated file: {replica_file}")
            else:
                tally.files_copied += 1
                self._log(LogLevel.INFO, f"Copied file: {replica_file}")
        except OSError as exc:
            self._log(LogLevel.ERROR, f"Error copying file {source_file}: {exc}")
            tally.errors_encountered += 1

    def _sync_subdirectories(self, pair: DirectoryPair, tally: SyncTally) -> list[DirectoryPair]:
        """Create missing replica subdirectories and return the pairs to descend into."""
        pending: list[DirectoryPair] = []

        for source_dir in file_ops.list_directories(pair.source):
            child = pair.child(source_dir.name)
            try:
                if not file_ops.is_directory(child.replica):
                    if child.replica.is_symlink() or child.replica.exists():
                        file_ops.delete_file(child.replica)
                        tally.files_deleted += 1
                        self._log(LogLevel.INFO, f"Removed file in place of directory: {child.replica}")
                    file_ops.make_directory(child.replica)
                    tally.directories_created += 1
                    self._log(LogLevel.INFO, f"Created directory: {child.replica}")
                pending.append(child)
            except OSError as exc:
                self._log(LogLevel.ERROR, f"Error creating directory {child.replica}: {exc}")
                tally.errors_encountered += 1

        return pending

    def _log(self, level: LogLevel, message: str) -> None:
        safe_emit(self.sink, level, message)
