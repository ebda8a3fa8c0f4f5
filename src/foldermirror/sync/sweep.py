"""
Deletion sweep: remove replica entries that no longer exist in the source.

Runs in two phases. Orphan files go first, so that a directory holding
nothing but orphans is already empty by the time directories are judged.
"""

from __future__ import annotations

from pathlib import Path

from foldermirror.core.logging import LogLevel, LogSink, safe_emit
from foldermirror.core.models import DirectoryPair, SyncTally
from foldermirror.platform import file_ops


def _replica_is_directory(pair: DirectoryPair, root: DirectoryPair) -> bool:
    # The root may be a link to a directory; entries below it are never followed
    if pair == root:
        return pair.replica.is_dir()
    return file_ops.is_directory(pair.replica)


class DeletionSweep:
    """Removes orphan files and orphan directories from the replica tree."""

    def __init__(self, sink: LogSink) -> None:
        self.sink = sink

    def sweep(self, source_root: Path, replica_root: Path, tally: SyncTally) -> None:
        root = DirectoryPair(source=source_root, replica=replica_root)
        self.remove_orphan_files(root, tally)
        self.remove_orphan_directories(root, tally)

    def remove_orphan_files(self, root: DirectoryPair, tally: SyncTally) -> None:
        """Phase A: delete replica files with no source counterpart.

        Descends into every replica directory, including those missing from
        the source, so that files below an orphan directory are each counted.
        """
        stack = [root]

        while stack:
            pair = stack.pop()
            try:
                if not _replica_is_directory(pair, root):
                    continue

                for replica_file in file_ops.list_files(pair.replica):
                    if not (pair.source / replica_file.name).is_file():
                        self._delete_file(replica_file, tally)

                for replica_dir in reversed(file_ops.list_directories(pair.replica)):
                    stack.append(pair.child(replica_dir.name))
            except OSError as exc:
                self._log(LogLevel.ERROR, f"Error checking files in {pair.replica}: {exc}")
                tally.errors_encountered += 1

    def remove_orphan_directories(self, root: DirectoryPair, tally: SyncTally) -> None:
        """Phase B: delete replica directories with no source counterpart.

        Post-order walk driven by an explicit stack: a matched directory is
        expanded first and re-evaluated once its children are done, in case
        its source counterpart vanished meanwhile. An orphan is removed with
        one recursive delete.
        """
        stack: list[tuple[DirectoryPair, bool]] = [(root, False)]

        while stack:
            pair, children_done = stack.pop()

            if children_done:
                # Kept when the source cannot be checked
                if pair != root and self._source_state(pair, tally) is False:
                    self._delete_directory(pair.replica, tally)
                continue

            try:
                if not _replica_is_directory(pair, root):
                    continue
                replica_dirs = file_ops.list_directories(pair.replica)
            except OSError as exc:
                self._log(LogLevel.ERROR, f"Error checking directories in {pair.replica}: {exc}")
                tally.errors_encountered += 1
                continue

            stack.append((pair, True))
            for replica_dir in reversed(replica_dirs):
                child = pair.child(replica_dir.name)
                matched = self._source_state(child, tally)
                if matched:
                    stack.append((child, False))
                elif matched is False:
                    self._delete_directory(child.replica, tally)

    def _source_state(self, pair: DirectoryPair, tally: SyncTally) -> bool | None:
        """Whether the pair's source directory exists, or None if it cannot be checked."""
        try:
            return file_ops.is_directory(pair.source)
        except OSError as exc:
            self._log(LogLevel.ERROR, f"Error checking directory {pair.source}: {exc}")
            tally.errors_encountered += 1
            return None

    def _delete_file(self, path: Path, tally: SyncTally) -> None:
        try:
            file_ops.delete_file(path)
            tally.files_deleted += 1
            self._log(LogLevel.INFO, f"Deleted file: {path}")
        except OSError as exc:
            self._log(LogLevel.ERROR, f"Error deleting file {path}: {exc}")
            tally.errors_encountered += 1

    def _delete_directory(self, path: Path, tally: SyncTally) -> None:
        try:
            directories, files = file_ops.delete_tree(path)
        except file_ops.TreeRemovalError as exc:
            directories, files = exc.directories, exc.files
            self._log(LogLevel.ERROR, f"Error deleting directory {path}: {exc}")
            tally.errors_encountered += 1
        else:
            self._log(LogLevel.INFO, f"Deleted directory: {path}")
        tally.directories_deleted += directories
        tally.files_deleted += files

    def _log(self, level: LogLevel, message: str) -> None:
        safe_emit(self.sink, level, message)
